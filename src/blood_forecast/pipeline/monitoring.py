"""
Sistema de Logging y Monitoreo del Pronóstico
Implementa logging estructurado, alertas y seguimiento de etapas
"""
import json
import logging
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional

import numpy as np

from ..config.settings import LOG_DATE_FORMAT, LOG_FORMAT, LOG_TO_FILE, LOGS_DIR


class LogLevel(Enum):
    """Niveles de logging"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AlertType(Enum):
    """Tipos de alertas"""
    INSUFFICIENT_HISTORY = "INSUFFICIENT_HISTORY"
    FIT_DIVERGENCE = "FIT_DIVERGENCE"
    NEGATIVE_PREDICTION = "NEGATIVE_PREDICTION"
    PROCESSING_ERROR = "PROCESSING_ERROR"


class PipelineLogger:
    """Logger estructurado que conserva eventos y alertas en memoria"""

    def __init__(self, name: str, log_to_file: bool = LOG_TO_FILE):
        self.name = name
        self.log_to_file = log_to_file
        self.logger = self._setup_logger()
        self.events = []
        self.alerts = []

    def _setup_logger(self) -> logging.Logger:
        """Configura el logger con handlers de consola y archivo"""
        logger = logging.getLogger(self.name)
        logger.setLevel(logging.DEBUG)

        # Evitar duplicar handlers
        if logger.handlers:
            return logger

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if self.log_to_file:
            LOGS_DIR.mkdir(parents=True, exist_ok=True)
            log_file = LOGS_DIR / f"{self.name}_latest.log"
            file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        return logger

    def log_event(self, level: LogLevel, message: str, metadata: Optional[Dict] = None):
        """
        Registra un evento con metadata estructurada

        Args:
            level: Nivel del log
            message: Mensaje descriptivo
            metadata: Metadata adicional (diccionario)
        """
        self.events.append({
            'timestamp': datetime.now().isoformat(),
            'level': level.value,
            'message': message,
            'metadata': metadata or {}
        })

        log_method = getattr(self.logger, level.value.lower())
        log_message = message
        if metadata:
            log_message += f" | Metadata: {json.dumps(metadata, ensure_ascii=False, default=str)}"
        log_method(log_message)

    def log_alert(self, alert_type: AlertType, description: str, severity: str,
                  metadata: Optional[Dict] = None):
        """
        Registra una alerta

        Args:
            alert_type: Tipo de alerta
            description: Descripción de la alerta
            severity: Severidad (LOW, MEDIUM, HIGH, CRITICAL)
            metadata: Metadata adicional
        """
        self.alerts.append({
            'timestamp': datetime.now().isoformat(),
            'alert_type': alert_type.value,
            'description': description,
            'severity': severity,
            'metadata': metadata or {}
        })

        level = logging.ERROR if severity in ['HIGH', 'CRITICAL'] else logging.WARNING
        self.logger.log(level, f"[ALERT:{alert_type.value}] {description} | Severity: {severity}")

    def get_summary(self) -> Dict:
        """Retorna un resumen de los eventos y alertas"""
        return {
            'total_events': len(self.events),
            'events_by_level': {
                level.value: sum(1 for e in self.events if e['level'] == level.value)
                for level in LogLevel
            },
            'total_alerts': len(self.alerts),
            'alerts_by_type': {
                alert_type.value: sum(1 for a in self.alerts if a['alert_type'] == alert_type.value)
                for alert_type in AlertType
            }
        }


class ForecastMonitor:
    """Chequeos no fatales sobre el ajuste y las predicciones"""

    def __init__(self, logger: PipelineLogger):
        self.logger = logger

    def check_fit(self, weights: Iterable[float], bias: float,
                  loss_history: Optional[List[float]] = None) -> bool:
        """
        Verifica que el ajuste no haya divergido (pesos y pérdida finitos)

        Returns:
            True si pasa la validación, False si no
        """
        params = np.append(np.asarray(list(weights), dtype=float), bias)
        finite_params = bool(np.all(np.isfinite(params)))
        final_loss = loss_history[-1] if loss_history else None
        finite_loss = final_loss is None or bool(np.isfinite(final_loss))

        if not (finite_params and finite_loss):
            self.logger.log_alert(
                AlertType.FIT_DIVERGENCE,
                "Model fit produced non-finite parameters or loss",
                'HIGH',
                {'final_loss': final_loss, 'finite_params': finite_params}
            )
            return False

        return True

    def check_negative_predictions(self, raw_predictions: List[float], clamp: bool) -> int:
        """
        Cuenta predicciones negativas y alerta si las hay

        Returns:
            Número de predicciones negativas
        """
        negatives = [p for p in raw_predictions if p < 0]
        if negatives:
            action = "clamped to 0" if clamp else "published as-is"
            self.logger.log_alert(
                AlertType.NEGATIVE_PREDICTION,
                f"{len(negatives)} forecast step(s) were negative and {action}",
                'MEDIUM',
                {'negative_values': negatives, 'clamp': clamp}
            )
        return len(negatives)


class PipelineExecutionTracker:
    """Rastreador de las etapas de una sesión de pronóstico"""

    def __init__(self, pipeline_name: str, log_to_file: bool = LOG_TO_FILE):
        self.pipeline_name = pipeline_name
        self.logger = PipelineLogger(f"pipeline_{pipeline_name}", log_to_file=log_to_file)
        self.start_time = None
        self.end_time = None
        self.stages = []
        self.current_stage = None

    def _total_duration(self) -> Optional[float]:
        if not (self.start_time and self.end_time):
            return None
        return (self.end_time - self.start_time).total_seconds()

    def start_pipeline(self):
        self.start_time = datetime.now()
        self.logger.log_event(LogLevel.INFO, f"Pipeline '{self.pipeline_name}' started")

    def start_stage(self, stage_name: str):
        self.current_stage = {'name': stage_name, 'start_time': datetime.now()}
        self.logger.log_event(LogLevel.DEBUG, f"Stage '{stage_name}' started")

    def complete_stage(self, stage_name: str, success: bool = True, metadata: Optional[Dict] = None):
        """
        Cierra la etapa en curso

        Una etapa que no es la actual se ignora: no hay etapas anidadas.
        """
        if not self.current_stage or self.current_stage['name'] != stage_name:
            return

        stage = self.current_stage
        stage['status'] = 'SUCCESS' if success else 'FAILED'
        stage['duration'] = (datetime.now() - stage.pop('start_time')).total_seconds()
        stage['metadata'] = metadata or {}
        self.stages.append(stage)
        self.current_stage = None

        self.logger.log_event(
            LogLevel.INFO if success else LogLevel.ERROR,
            f"Stage '{stage_name}' {stage['status']} en {stage['duration']:.3f}s",
            stage['metadata']
        )

    def complete_pipeline(self, success: bool = True):
        self.end_time = datetime.now()
        status = 'SUCCESS' if success else 'FAILED'
        self.logger.log_event(
            LogLevel.INFO if success else LogLevel.ERROR,
            f"Pipeline '{self.pipeline_name}' {status}",
            {'stages': [s['name'] for s in self.stages], 'total_duration': self._total_duration()}
        )

    def get_execution_report(self) -> Dict:
        """Reporte de la sesión: etapas con estado y duración, más el resumen de alertas"""
        return {
            'pipeline_name': self.pipeline_name,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'total_duration': self._total_duration(),
            'stages': self.stages,
            'logger_summary': self.logger.get_summary()
        }
