"""
Configuración central del Sistema de Pronóstico de Demanda de Hemocomponentes
"""
from pathlib import Path
from typing import Dict

# ============== RUTAS DEL PROYECTO ==============
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
LOGS_DIR = BASE_DIR / "logs"

# ============== CONFIGURACIÓN DE LA SERIE SINTÉTICA ==============

# Días de histórico (hoy incluido)
HISTORY_DAYS = 31

# Componentes de la serie: base + estacional + tendencia + ruido
BASE_VALUE = 100
SEASONAL_AMPLITUDE = 20
SEASONAL_PERIOD_DAYS = 7  # sin((i / 7) * pi) -> ciclo completo cada 14 días
TREND_PER_DAY = 0.5
NOISE_AMPLITUDE = 5  # ruido uniforme en [-5, 5)

# Formato corto de fecha para las etiquetas (ej: "Jan 05")
DATE_LABEL_FORMAT = '%b %d'

# ============== CONFIGURACIÓN DEL PRONÓSTICO ==============

# Ventana de observación (días previos usados como features)
LOOKBACK_DAYS = 7

# Horizonte de pronóstico
FORECAST_HORIZON_DAYS = 7

# Recorta predicciones negativas a 0 (el histórico ya se recorta)
CLAMP_FORECAST = True

# ============== CONFIGURACIÓN DE MODELOS ==============

MODEL_CONFIG = {
    'solver': 'adam',  # 'adam' (iterativo) u 'ols' (mínimos cuadrados)
    'epochs': 100,
    'learning_rate': 0.001,
    'beta_1': 0.9,
    'beta_2': 0.999,
    'epsilon': 1e-7,
    'random_seed': 42,
}

SUPPORTED_SOLVERS = ('adam', 'ols')

# ============== RECOMENDACIONES ==============

# Líneas fijas que acompañan a la recomendación calculada de colecta
STATIC_RECOMMENDATIONS = [
    "Schedule additional donation drives for next week",
    "Monitor O-negative blood type stocks closely",
]

DEMAND_UNIT = "units"

# ============== CONFIGURACIÓN DE LOGGING ==============

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_LEVEL = 'INFO'
LOG_TO_FILE = False


# ============== EXPORTAR CONFIGURACIÓN ==============

def get_config() -> Dict:
    """Retorna todas las configuraciones como diccionario"""
    return {
        'paths': {
            'base_dir': str(BASE_DIR),
            'logs_dir': str(LOGS_DIR),
        },
        'series': {
            'history_days': HISTORY_DAYS,
            'base_value': BASE_VALUE,
            'seasonal_amplitude': SEASONAL_AMPLITUDE,
            'seasonal_period_days': SEASONAL_PERIOD_DAYS,
            'trend_per_day': TREND_PER_DAY,
            'noise_amplitude': NOISE_AMPLITUDE,
            'date_label_format': DATE_LABEL_FORMAT,
        },
        'forecast': {
            'lookback_days': LOOKBACK_DAYS,
            'horizon_days': FORECAST_HORIZON_DAYS,
            'clamp_forecast': CLAMP_FORECAST,
        },
        'model': dict(MODEL_CONFIG),
        'recommendations': list(STATIC_RECOMMENDATIONS),
        'logging': {
            'format': LOG_FORMAT,
            'level': LOG_LEVEL,
            'log_to_file': LOG_TO_FILE,
        },
    }


if __name__ == "__main__":
    config = get_config()
    print("✓ Configuración cargada exitosamente")
    print(f"✓ Directorio base: {config['paths']['base_dir']}")
    print(f"✓ Ventana: {config['forecast']['lookback_days']} días | "
          f"Horizonte: {config['forecast']['horizon_days']} días")
