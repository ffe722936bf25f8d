"""
Tests para el logging estructurado y el seguimiento de etapas
"""

import numpy as np

from blood_forecast.pipeline.monitoring import (
    AlertType, ForecastMonitor, LogLevel, PipelineExecutionTracker, PipelineLogger
)


class TestPipelineLogger:

    def test_events_are_recorded(self):
        pipeline_logger = PipelineLogger("test_events", log_to_file=False)
        pipeline_logger.log_event(LogLevel.INFO, "hello", {'k': 1})

        summary = pipeline_logger.get_summary()
        assert summary['total_events'] == 1
        assert summary['events_by_level']['INFO'] == 1
        assert pipeline_logger.events[0]['metadata'] == {'k': 1}


class TestForecastMonitor:

    def test_finite_fit_passes(self):
        monitor = ForecastMonitor(PipelineLogger("test_fit_ok", log_to_file=False))
        assert monitor.check_fit([0.1] * 7, 1.0, [10.0, 5.0])
        assert monitor.logger.alerts == []

    def test_divergent_fit_alerts(self):
        monitor = ForecastMonitor(PipelineLogger("test_fit_nan", log_to_file=False))
        assert not monitor.check_fit([np.nan] * 7, 1.0, [10.0, np.inf])

        alert = monitor.logger.alerts[0]
        assert alert['alert_type'] == AlertType.FIT_DIVERGENCE.value
        assert alert['severity'] == 'HIGH'

    def test_negative_predictions_alert(self):
        monitor = ForecastMonitor(PipelineLogger("test_negative", log_to_file=False))
        assert monitor.check_negative_predictions([5.0, -1.2, -0.1], clamp=True) == 2
        assert monitor.logger.alerts[0]['alert_type'] == AlertType.NEGATIVE_PREDICTION.value

        assert monitor.check_negative_predictions([5.0], clamp=True) == 0
        assert len(monitor.logger.alerts) == 1


class TestPipelineExecutionTracker:

    def test_stage_lifecycle(self):
        tracker = PipelineExecutionTracker("test_tracker", log_to_file=False)
        tracker.start_pipeline()
        tracker.start_stage("generate_history")
        tracker.complete_stage("generate_history", metadata={'days': 31})
        tracker.start_stage("train_model")
        tracker.complete_stage("train_model", success=False)
        tracker.complete_pipeline(success=False)

        report = tracker.get_execution_report()
        assert [s['status'] for s in report['stages']] == ['SUCCESS', 'FAILED']
        assert report['stages'][0]['metadata'] == {'days': 31}
        assert report['stages'][0]['duration'] >= 0
        assert 'start_time' not in report['stages'][0]
        assert report['total_duration'] >= 0
        assert report['logger_summary']['events_by_level']['ERROR'] == 2

    def test_complete_unknown_stage_is_ignored(self):
        tracker = PipelineExecutionTracker("test_tracker_unknown", log_to_file=False)
        tracker.start_pipeline()
        tracker.complete_stage("never_started")
        assert tracker.stages == []
