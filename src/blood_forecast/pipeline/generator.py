"""
Generador de la Serie Histórica Sintética
=========================================

Simula los últimos N días de demanda de hemocomponentes combinando:
1. Valor base
2. Componente estacional (senoidal)
3. Tendencia lineal
4. Ruido uniforme

Cada valor se redondea y se recorta a enteros no negativos.
"""

import logging
import math
from datetime import date, timedelta
from typing import Optional, Union

import numpy as np

from ..config.settings import (
    BASE_VALUE, HISTORY_DAYS, NOISE_AMPLITUDE, SEASONAL_AMPLITUDE,
    SEASONAL_PERIOD_DAYS, TREND_PER_DAY
)
from ..series import DemandPoint, HistorySeries, round_half_up

logger = logging.getLogger(__name__)


class DemandSeriesGenerator:
    """Generador de histórico sintético de demanda"""

    def __init__(self,
                 n_days: int = HISTORY_DAYS,
                 base_value: float = BASE_VALUE,
                 seasonal_amplitude: float = SEASONAL_AMPLITUDE,
                 seasonal_period: float = SEASONAL_PERIOD_DAYS,
                 trend_per_day: float = TREND_PER_DAY,
                 noise_amplitude: float = NOISE_AMPLITUDE,
                 rng: Optional[Union[np.random.Generator, int]] = None):
        """
        Args:
            n_days: Días de histórico, terminando hoy
            base_value: Nivel base de demanda
            seasonal_amplitude: Amplitud del término senoidal
            seasonal_period: Divisor del offset dentro del seno
            trend_per_day: Pendiente de la tendencia por día de offset
            noise_amplitude: El ruido es uniforme en [-amplitud, amplitud)
            rng: Generador de numpy o semilla. Sin semilla el ruido no es
                reproducible entre ejecuciones
        """
        if n_days < 1:
            raise ValueError(f"n_days debe ser >= 1, se recibió {n_days}")
        if seasonal_period == 0:
            raise ValueError("seasonal_period no puede ser 0")
        if noise_amplitude < 0:
            raise ValueError("noise_amplitude debe ser >= 0")

        self.n_days = n_days
        self.base_value = base_value
        self.seasonal_amplitude = seasonal_amplitude
        self.seasonal_period = seasonal_period
        self.trend_per_day = trend_per_day
        self.noise_amplitude = noise_amplitude
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)

    def value_for_offset(self, offset: int, noise: float = 0.0) -> int:
        """Valor de demanda para el día `offset` días antes de hoy"""
        seasonal = math.sin((offset / self.seasonal_period) * math.pi) * self.seasonal_amplitude
        trend = offset * self.trend_per_day
        return max(0, round_half_up(self.base_value + seasonal + trend + noise))

    def _draw_noise(self) -> float:
        if self.noise_amplitude == 0:
            return 0.0
        return float(self.rng.uniform(-self.noise_amplitude, self.noise_amplitude))

    def generate(self, today: Optional[date] = None) -> HistorySeries:
        """
        Genera la serie histórica del más antiguo a hoy

        Args:
            today: Día final de la serie (por defecto la fecha actual)

        Returns:
            Tupla de DemandPoint con `actual` y sin `predicted`
        """
        today = today or date.today()

        points = []
        for offset in range(self.n_days - 1, -1, -1):
            day = today - timedelta(days=offset)
            value = self.value_for_offset(offset, self._draw_noise())
            points.append(DemandPoint(date=day, actual=value))

        logger.info(
            f"Histórico sintético generado: {len(points)} días "
            f"({points[0].label} a {points[-1].label})"
        )
        return tuple(points)


def generate_history(today: Optional[date] = None,
                     rng: Optional[Union[np.random.Generator, int]] = None,
                     **kwargs) -> HistorySeries:
    """Atajo funcional: genera el histórico con la configuración por defecto"""
    return DemandSeriesGenerator(rng=rng, **kwargs).generate(today=today)
