"""
Sistema de Pronóstico de Demanda de Hemocomponentes
"""

__version__ = "1.0.0"
