"""
Ejemplo de Uso del Pipeline de Predicción
==========================================

Script simple para ejecutar el pronóstico de 7 días
"""

import sys
from pathlib import Path

# Añadir src al path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from blood_forecast.prediction.forecaster import main

if __name__ == "__main__":
    sys.exit(main())
