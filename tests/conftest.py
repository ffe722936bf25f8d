"""
Fixtures compartidas para los tests del sistema de pronóstico
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from blood_forecast.pipeline.generator import DemandSeriesGenerator


# Serie sin ruido calculada a mano: round(100 + sin((i/7)*pi)*20 + i*0.5), i = 30..0
ZERO_NOISE_VALUES = [
    131, 123, 114, 105, 97, 93, 93, 96, 102, 111, 119, 125, 128, 128, 124, 116,
    107, 98, 90, 86, 86, 89, 95, 104, 112, 118, 121, 121, 117, 109, 100,
]

TODAY = date(2024, 1, 31)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def zero_noise_history():
    """Histórico determinista de 31 días terminando el 31 de enero de 2024"""
    return DemandSeriesGenerator(noise_amplitude=0).generate(today=TODAY)


@pytest.fixture
def noisy_history():
    """Histórico con ruido y semilla fija"""
    return DemandSeriesGenerator(rng=123).generate(today=TODAY)
