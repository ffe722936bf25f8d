"""
Módulo de Predicción
====================

Ajuste del modelo de ventana y pronóstico recursivo de demanda
"""

from .forecaster import (
    ForecastPipeline, ForecastResult, RolloutStep, fit, forecast, rollout, rollout_steps
)
from .summary import DemandSummary, summarize

__all__ = [
    'ForecastPipeline',
    'ForecastResult',
    'RolloutStep',
    'fit',
    'forecast',
    'rollout',
    'rollout_steps',
    'DemandSummary',
    'summarize',
]
