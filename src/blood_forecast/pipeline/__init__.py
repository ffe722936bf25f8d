"""
Pipeline de Datos - Serie sintética y ventanas de entrenamiento
"""

from .generator import DemandSeriesGenerator, generate_history
from .windowing import (
    InsufficientHistoryError, build_training_examples, examples_to_frame, lag_feature_names
)
from .monitoring import PipelineExecutionTracker, PipelineLogger, ForecastMonitor

__all__ = [
    'DemandSeriesGenerator',
    'generate_history',
    'InsufficientHistoryError',
    'build_training_examples',
    'examples_to_frame',
    'lag_feature_names',
    'PipelineExecutionTracker',
    'PipelineLogger',
    'ForecastMonitor',
]
