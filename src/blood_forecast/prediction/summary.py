"""
Resumen del Pronóstico y Recomendaciones
========================================

Valores que muestra el tablero, derivados sin cálculo adicional:
- Demanda actual (último valor observado)
- Pico pronosticado (máximo de las predicciones)
- Período de pronóstico (días)
- Variación de colecta recomendada (mañana - hoy)
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..config.settings import DEMAND_UNIT, STATIC_RECOMMENDATIONS
from ..series import ForecastSeries, HistorySeries


@dataclass(frozen=True)
class DemandSummary:
    current_demand: int
    predicted_peak: int
    forecast_days: int
    collection_increase: int
    recommendations: Tuple[str, ...]


def collection_recommendation(delta: int, unit: str = DEMAND_UNIT) -> str:
    """Texto de la recomendación de colecta para mañana"""
    if delta >= 0:
        return f"Increase collection by {delta} {unit} for tomorrow"
    return f"Collection can be reduced by {-delta} {unit} for tomorrow"


def summarize(history: HistorySeries,
              forecast: ForecastSeries,
              static_recommendations: Sequence[str] = STATIC_RECOMMENDATIONS) -> DemandSummary:
    """
    Calcula las tarjetas del tablero y la lista de recomendaciones

    Raises:
        ValueError: Si el histórico o el pronóstico están vacíos (los
            valores derivados no están definidos)
    """
    if not history:
        raise ValueError("No hay histórico: el resumen no está definido")
    if not forecast:
        raise ValueError("No hay pronóstico: el resumen no está definido")

    current = history[-1].actual
    if current is None:
        raise ValueError(f"El último día del histórico ({history[-1].label}) no tiene valor observado")

    predictions = [p.predicted for p in forecast]
    if any(p is None for p in predictions):
        raise ValueError("El pronóstico contiene días sin predicción")

    delta = predictions[0] - current

    return DemandSummary(
        current_demand=current,
        predicted_peak=max(predictions),
        forecast_days=len(forecast),
        collection_increase=delta,
        recommendations=(collection_recommendation(delta),) + tuple(static_recommendations),
    )
