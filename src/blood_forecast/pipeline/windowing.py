"""
Construcción del Conjunto de Entrenamiento por Ventanas
=======================================================

Convierte la serie histórica en un problema supervisado: cada ejemplo usa
los W días previos (lags) como features y el día siguiente como objetivo.
Para una serie de longitud L se obtienen exactamente L - W ejemplos.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from ..config.settings import LOOKBACK_DAYS
from ..series import TrainingExample

logger = logging.getLogger(__name__)


class InsufficientHistoryError(ValueError):
    """El histórico no alcanza para formar al menos un ejemplo de entrenamiento"""


def validate_history_length(n_values: int, lookback: int):
    """Falla si la serie no tiene al menos lookback + 1 valores"""
    if lookback < 1:
        raise InsufficientHistoryError(f"La ventana debe ser >= 1, se recibió {lookback}")
    if n_values <= lookback:
        raise InsufficientHistoryError(
            f"Se requieren al menos {lookback + 1} días de histórico "
            f"para una ventana de {lookback}; se recibieron {n_values}"
        )


def lag_feature_names(lookback: int = LOOKBACK_DAYS) -> List[str]:
    """Nombres de columnas del lag más antiguo al más reciente"""
    return [f'demand_lag_{lag}d' for lag in range(lookback, 0, -1)]


def build_training_examples(values: Sequence[int],
                            lookback: int = LOOKBACK_DAYS) -> List[TrainingExample]:
    """
    Extrae los pares (ventana, objetivo) de la serie

    Args:
        values: Valores observados en orden cronológico
        lookback: Tamaño de la ventana

    Returns:
        Lista de L - W ejemplos; el i-ésimo usa values[i:i+W] y apunta a values[i+W]
    """
    validate_history_length(len(values), lookback)

    examples = [
        TrainingExample(window=tuple(values[i - lookback:i]), target=values[i])
        for i in range(lookback, len(values))
    ]

    logger.debug(f"Ejemplos de entrenamiento construidos: {len(examples)} (ventana={lookback})")
    return examples


def examples_to_frame(examples: Sequence[TrainingExample]) -> Tuple[pd.DataFrame, pd.Series]:
    """Convierte los ejemplos a (X, y) con columnas de lags"""
    if not examples:
        raise InsufficientHistoryError("No hay ejemplos de entrenamiento")

    lookback = len(examples[0].window)
    X = pd.DataFrame(
        np.array([ex.window for ex in examples], dtype=float),
        columns=lag_feature_names(lookback)
    )
    y = pd.Series([float(ex.target) for ex in examples], name='demand')
    return X, y
