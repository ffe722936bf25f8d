"""Configuración del sistema de pronóstico de hemocomponentes"""

from .settings import *  # noqa: F401,F403
