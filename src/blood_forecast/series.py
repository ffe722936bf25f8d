"""
Tipos de datos de la serie de demanda
=====================================

Un DemandPoint representa la demanda de un día: el valor observado
(`actual`), el pronosticado (`predicted`) o ambos.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from .config.settings import DATE_LABEL_FORMAT


def round_half_up(value: float) -> int:
    """Redondeo al entero más cercano con .5 hacia arriba (no bancario)"""
    return int(math.floor(value + 0.5))


def format_label(day: date, fmt: str = DATE_LABEL_FORMAT) -> str:
    """Etiqueta corta de calendario, ej: 'Jan 05'"""
    return day.strftime(fmt)


@dataclass(frozen=True)
class DemandPoint:
    """Demanda de un día (observada, pronosticada o ambas)"""

    date: date
    actual: Optional[int] = None
    predicted: Optional[int] = None

    def __post_init__(self):
        if self.actual is None and self.predicted is None:
            raise ValueError(f"DemandPoint sin valores para {self.date}")

    @property
    def label(self) -> str:
        return format_label(self.date)

    def as_record(self, sentinel: bool = False) -> Dict:
        """
        Convierte el punto a diccionario.

        Args:
            sentinel: Si True, los valores ausentes se reportan como 0
                (formato del tablero original)
        """
        missing = 0 if sentinel else None
        return {
            'fecha': self.date,
            'label': self.label,
            'actual': self.actual if self.actual is not None else missing,
            'predicted': self.predicted if self.predicted is not None else missing,
        }


@dataclass(frozen=True)
class TrainingExample:
    """Par (ventana, objetivo) derivado del histórico"""

    window: Tuple[int, ...]
    target: int


# Series inmutables: tuplas ordenadas del día más antiguo al más reciente
HistorySeries = Tuple[DemandPoint, ...]
ForecastSeries = Tuple[DemandPoint, ...]


def actual_values(series: Iterable[DemandPoint]) -> List[int]:
    """Valores observados en orden cronológico"""
    values = []
    for point in series:
        if point.actual is None:
            raise ValueError(f"El punto {point.label} no tiene valor observado")
        values.append(point.actual)
    return values


def combine(history: HistorySeries, forecast: ForecastSeries) -> Tuple[DemandPoint, ...]:
    """Concatena histórico y pronóstico en orden cronológico para graficar"""
    return tuple(history) + tuple(forecast)


def to_frame(points: Iterable[DemandPoint], sentinel: bool = False) -> pd.DataFrame:
    """
    DataFrame con columnas fecha, label, actual, predicted.

    Los valores ausentes quedan como <NA> (enteros nulos de pandas) salvo
    que se pida el formato con centinela 0.
    """
    df = pd.DataFrame(
        [p.as_record(sentinel=sentinel) for p in points],
        columns=['fecha', 'label', 'actual', 'predicted']
    )
    df['fecha'] = pd.to_datetime(df['fecha'])
    df['actual'] = df['actual'].astype('Int64')
    df['predicted'] = df['predicted'].astype('Int64')
    return df
