"""
Pipeline de Predicción para los Próximos 7 Días
===============================================

Genera el pronóstico de demanda de hemocomponentes usando:
1. Histórico sintético de 31 días (hasta hoy)
2. Conjunto supervisado con ventana de 7 días
3. Regresión lineal (7 pesos + sesgo)
4. Predicción recursiva día por día: cada predicción entra en la ventana
   del día siguiente

Uso:
    blood-forecast --seed 42

Output:
    - Tabla histórico + pronóstico y resumen por consola
"""

import argparse
import logging
import math
import sys
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..config.settings import (
    CLAMP_FORECAST, FORECAST_HORIZON_DAYS, HISTORY_DAYS, LOG_FORMAT, LOG_LEVEL, LOG_TO_FILE,
    LOOKBACK_DAYS, MODEL_CONFIG, SUPPORTED_SOLVERS
)
from ..models.linear_models import BaseModel, create_model
from ..pipeline.generator import DemandSeriesGenerator
from ..pipeline.monitoring import AlertType, ForecastMonitor, PipelineExecutionTracker
from ..pipeline.windowing import (
    InsufficientHistoryError, build_training_examples, examples_to_frame, validate_history_length
)
from ..series import (
    DemandPoint, ForecastSeries, HistorySeries, actual_values, combine, round_half_up, to_frame
)
from .summary import DemandSummary, summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RolloutStep:
    """Traza de un paso de la predicción recursiva"""

    step: int
    date: date
    window: Tuple[float, ...]
    raw: float
    predicted: int


def fit(series: HistorySeries,
        lookback: int = LOOKBACK_DAYS,
        solver: str = MODEL_CONFIG['solver'],
        **model_kwargs) -> BaseModel:
    """
    Ajusta el modelo lineal de ventana sobre el histórico

    Args:
        series: Histórico con valores observados
        lookback: Tamaño de la ventana
        solver: 'adam' u 'ols'
        **model_kwargs: Hiperparámetros del modelo

    Raises:
        InsufficientHistoryError: Si len(series) <= lookback
    """
    values = actual_values(series)
    examples = build_training_examples(values, lookback)
    X, y = examples_to_frame(examples)

    model = create_model(solver, **model_kwargs)
    return model.fit(X, y)


def _publish(raw: float, clamp: bool) -> int:
    """Redondea la salida del modelo; recorta a 0 si se pide"""
    if not math.isfinite(raw):
        return 0
    value = round_half_up(raw)
    return max(0, value) if clamp else value


def rollout_steps(model: BaseModel,
                  last_window: Sequence[float],
                  horizon: int = FORECAST_HORIZON_DAYS,
                  start_date: Optional[date] = None,
                  clamp: bool = CLAMP_FORECAST) -> List[RolloutStep]:
    """
    Predicción recursiva paso a paso

    La ventana del paso k+1 es la del paso k sin su valor más antiguo y con
    la predicción publicada del paso k al final.

    Args:
        model: Modelo entrenado
        last_window: Últimos W valores del histórico
        horizon: Días a predecir
        start_date: Fecha del primer día pronosticado (por defecto mañana)
        clamp: Si True, las predicciones negativas se publican como 0
    """
    if horizon < 1:
        raise ValueError(f"El horizonte debe ser >= 1, se recibió {horizon}")
    if model.weights is not None and len(last_window) != len(model.weights):
        raise ValueError(
            f"La ventana tiene {len(last_window)} valores y el modelo espera {len(model.weights)}"
        )

    start_date = start_date or (date.today() + timedelta(days=1))
    window = [float(v) for v in last_window]
    steps = []

    for step in range(1, horizon + 1):
        raw = model.predict_window(window)
        predicted = _publish(raw, clamp)
        steps.append(RolloutStep(
            step=step,
            date=start_date + timedelta(days=step - 1),
            window=tuple(window),
            raw=raw,
            predicted=predicted,
        ))
        window = window[1:] + [float(predicted)]

    return steps


def rollout(model: BaseModel,
            last_window: Sequence[float],
            horizon: int = FORECAST_HORIZON_DAYS,
            start_date: Optional[date] = None,
            clamp: bool = CLAMP_FORECAST) -> ForecastSeries:
    """Serie pronosticada a partir de la última ventana observada"""
    steps = rollout_steps(model, last_window, horizon, start_date, clamp)
    return tuple(DemandPoint(date=s.date, predicted=s.predicted) for s in steps)


def forecast(history: HistorySeries,
             lookback: int = LOOKBACK_DAYS,
             horizon: int = FORECAST_HORIZON_DAYS,
             solver: str = MODEL_CONFIG['solver'],
             clamp: bool = CLAMP_FORECAST,
             **model_kwargs) -> ForecastSeries:
    """
    Entrena con el histórico y pronostica los `horizon` días siguientes

    El primer día pronosticado es el siguiente a la última fecha del
    histórico. El modelo ajustado no se conserva.
    """
    validate_history_length(len(history), lookback)
    model = fit(history, lookback, solver, **model_kwargs)
    last_window = actual_values(history)[-lookback:]
    start_date = history[-1].date + timedelta(days=1)
    return rollout(model, last_window, horizon, start_date, clamp)


@dataclass(frozen=True)
class ForecastResult:
    history: HistorySeries
    forecast: ForecastSeries
    summary: DemandSummary
    steps: Tuple[RolloutStep, ...]
    model_params: Dict
    report: Dict

    @property
    def combined(self) -> Tuple[DemandPoint, ...]:
        return combine(self.history, self.forecast)


class ForecastPipeline:
    """Pipeline completo: histórico -> entrenamiento -> pronóstico -> resumen"""

    def __init__(self,
                 n_days: int = HISTORY_DAYS,
                 lookback: int = LOOKBACK_DAYS,
                 horizon: int = FORECAST_HORIZON_DAYS,
                 solver: str = MODEL_CONFIG['solver'],
                 clamp: bool = CLAMP_FORECAST,
                 generator: Optional[DemandSeriesGenerator] = None,
                 rng: Optional[np.random.Generator] = None,
                 model_kwargs: Optional[Dict] = None,
                 log_to_file: bool = LOG_TO_FILE):
        """
        Inicializa el pipeline

        Args:
            n_days: Días de histórico sintético
            lookback: Tamaño de la ventana
            horizon: Días a pronosticar
            solver: 'adam' u 'ols'
            clamp: Recorta predicciones negativas a 0
            generator: Generador de histórico (si no se da se crea uno con `rng`)
            rng: Fuente aleatoria para el ruido del histórico. Excluyente con
                `generator`, que ya trae su propia fuente
            model_kwargs: Hiperparámetros del modelo
            log_to_file: Si True, el tracker escribe también en logs/
        """
        if solver not in SUPPORTED_SOLVERS:
            raise ValueError(f"Solver '{solver}' no reconocido. Opciones: {list(SUPPORTED_SOLVERS)}")
        if n_days <= lookback:
            raise InsufficientHistoryError(
                f"n_days ({n_days}) debe ser mayor que la ventana ({lookback})"
            )
        if horizon < 1:
            raise ValueError(f"El horizonte debe ser >= 1, se recibió {horizon}")
        if generator is not None and rng is not None:
            raise ValueError("Use `generator` o `rng`, no ambos")

        self.lookback = lookback
        self.horizon = horizon
        self.solver = solver
        self.clamp = clamp
        self.generator = generator or DemandSeriesGenerator(n_days=n_days, rng=rng)
        self.model_kwargs = model_kwargs or self._default_model_kwargs(solver)
        self.log_to_file = log_to_file
        self.last_report = None

    @staticmethod
    def _default_model_kwargs(solver: str) -> Dict:
        if solver != 'adam':
            return {}
        return {k: v for k, v in MODEL_CONFIG.items() if k != 'solver'}

    def run(self, today: Optional[date] = None) -> ForecastResult:
        """
        Ejecuta la sesión completa una vez

        Args:
            today: Último día del histórico (por defecto la fecha actual)
        """
        tracker = PipelineExecutionTracker("blood_demand_forecast", log_to_file=self.log_to_file)
        monitor = ForecastMonitor(tracker.logger)
        tracker.start_pipeline()
        stage = "generate_history"

        try:
            tracker.start_stage(stage)
            history = self.generator.generate(today=today)
            tracker.complete_stage(stage, metadata={'days': len(history)})

            stage = "train_model"
            tracker.start_stage(stage)
            model = fit(history, self.lookback, self.solver, **self.model_kwargs)
            monitor.check_fit(model.weights, model.bias, model.loss_history)
            tracker.complete_stage(stage, metadata={
                'solver': self.solver,
                'n_examples': len(history) - self.lookback,
                'final_loss': model.loss_history[-1] if model.loss_history else None,
            })

            stage = "forecast"
            tracker.start_stage(stage)
            steps = rollout_steps(
                model,
                actual_values(history)[-self.lookback:],
                self.horizon,
                history[-1].date + timedelta(days=1),
                self.clamp,
            )
            monitor.check_negative_predictions([s.raw for s in steps], self.clamp)
            predictions = tuple(DemandPoint(date=s.date, predicted=s.predicted) for s in steps)
            tracker.complete_stage(stage, metadata={'horizon': len(predictions)})

            stage = "summarize"
            tracker.start_stage(stage)
            summary = summarize(history, predictions)
            tracker.complete_stage(stage)
        except Exception as e:
            logger.error(f"Error en la etapa '{stage}': {e}")
            alert_type = (
                AlertType.INSUFFICIENT_HISTORY if isinstance(e, InsufficientHistoryError)
                else AlertType.PROCESSING_ERROR
            )
            tracker.logger.log_alert(alert_type, str(e), 'HIGH', {'stage': stage})
            tracker.complete_stage(stage, success=False, metadata={'error': str(e)})
            tracker.complete_pipeline(success=False)
            self.last_report = tracker.get_execution_report()
            raise

        tracker.complete_pipeline(success=True)
        self.last_report = tracker.get_execution_report()

        for s in steps:
            logger.info(f"📅 Día {s.step}/{self.horizon}: {s.date.isoformat()} -> {s.predicted} (raw={s.raw:.2f})")

        return ForecastResult(
            history=history,
            forecast=predictions,
            summary=summary,
            steps=tuple(steps),
            model_params=model.get_params(),
            report=self.last_report,
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Pronóstico sintético de demanda de hemocomponentes (7 días)"
    )
    parser.add_argument('--seed', type=int, default=None,
                        help="Semilla del ruido del histórico (por defecto no reproducible)")
    parser.add_argument('--solver', choices=SUPPORTED_SOLVERS, default=MODEL_CONFIG['solver'],
                        help="Método de ajuste del modelo lineal")
    parser.add_argument('--no-clamp', action='store_true',
                        help="Publica predicciones negativas sin recortar")
    parser.add_argument('--sentinel', action='store_true',
                        help="Muestra los valores ausentes como 0 (formato original)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Función principal"""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    logger.info("🚀 Iniciando pronóstico de demanda de hemocomponentes")

    try:
        pipeline = ForecastPipeline(
            solver=args.solver,
            clamp=not args.no_clamp,
            rng=np.random.default_rng(args.seed),
        )
        result = pipeline.run()
    except Exception as e:
        logger.error(f"❌ Error en el pronóstico: {e}")
        return 1

    table = to_frame(result.combined, sentinel=args.sentinel)
    print(table[['label', 'actual', 'predicted']].to_string(index=False))

    summary = result.summary
    print("\n" + "=" * 60)
    print(f"Current Demand:   {summary.current_demand} units")
    print(f"Predicted Peak:   {summary.predicted_peak} units")
    print(f"Forecast Period:  {summary.forecast_days} days")
    print("=" * 60)
    for line in summary.recommendations:
        print(f"  • {line}")

    logger.info("✅ Pronóstico completado exitosamente")
    return 0


if __name__ == '__main__':
    sys.exit(main())
