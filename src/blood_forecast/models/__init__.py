"""
Modelos Predictivos
Sistema de Pronóstico de Demanda de Hemocomponentes
"""

from .linear_models import AdamLinearModel, BaseModel, LeastSquaresModel, create_model

__all__ = [
    'AdamLinearModel',
    'BaseModel',
    'LeastSquaresModel',
    'create_model',
]
