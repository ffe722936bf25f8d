"""
Tests para los modelos lineales de ventana
"""

import numpy as np
import pandas as pd
import pytest

from blood_forecast.models.linear_models import (
    AdamLinearModel, LeastSquaresModel, create_model
)
from blood_forecast.pipeline.windowing import build_training_examples, examples_to_frame

from conftest import ZERO_NOISE_VALUES


@pytest.fixture
def training_frame():
    return examples_to_frame(build_training_examples(ZERO_NOISE_VALUES, 7))


@pytest.fixture
def exact_linear_data():
    """Datos generados por un mapa lineal conocido"""
    rng = np.random.default_rng(0)
    X = pd.DataFrame(rng.normal(100, 10, size=(50, 7)))
    true_w = np.array([0.1, -0.2, 0.3, 0.05, 0.0, 0.4, 0.25])
    y = pd.Series(X.values @ true_w + 12.0)
    return X, y, true_w


class TestLeastSquaresModel:

    def test_recovers_known_coefficients(self, exact_linear_data):
        X, y, true_w = exact_linear_data
        model = LeastSquaresModel().fit(X, y)

        assert model.is_trained
        np.testing.assert_allclose(model.weights, true_w, atol=1e-8)
        assert model.bias == pytest.approx(12.0, abs=1e-6)
        assert model.loss_history[-1] == pytest.approx(0.0, abs=1e-10)

    def test_predict_window(self, exact_linear_data):
        X, y, _ = exact_linear_data
        model = LeastSquaresModel().fit(X, y)
        assert model.predict_window(X.iloc[0].values) == pytest.approx(y.iloc[0])


class TestAdamLinearModel:

    def test_seeded_fit_is_reproducible(self, training_frame):
        X, y = training_frame
        first = AdamLinearModel(random_seed=7).fit(X, y)
        second = AdamLinearModel(random_seed=7).fit(X, y)

        np.testing.assert_array_equal(first.weights, second.weights)
        assert first.bias == second.bias
        assert first.loss_history == second.loss_history

    def test_loss_decreases(self, training_frame):
        X, y = training_frame
        model = AdamLinearModel().fit(X, y)

        assert len(model.loss_history) == 100
        assert model.loss_history[-1] < model.loss_history[0]
        assert np.all(np.isfinite(model.weights))

    def test_get_params_includes_coefficients(self, training_frame):
        X, y = training_frame
        params = AdamLinearModel().fit(X, y).get_params()
        assert len(params['weights']) == 7
        assert 'bias' in params
        assert params['epochs'] == 100

    @pytest.mark.parametrize("kwargs", [{'epochs': 0}, {'learning_rate': 0}])
    def test_invalid_hyperparameters(self, kwargs):
        with pytest.raises(ValueError):
            AdamLinearModel(**kwargs)


class TestBaseModel:

    def test_predict_before_fit(self):
        with pytest.raises(RuntimeError):
            AdamLinearModel().predict(np.zeros((1, 7)))

    def test_wrong_window_size(self, training_frame):
        X, y = training_frame
        model = LeastSquaresModel().fit(X, y)
        with pytest.raises(ValueError):
            model.predict_window([1.0, 2.0, 3.0])

    def test_empty_training_set(self):
        with pytest.raises(ValueError):
            LeastSquaresModel().fit(pd.DataFrame(np.empty((0, 7))), pd.Series(dtype=float))


class TestCreateModel:

    def test_known_solvers(self):
        assert isinstance(create_model('adam'), AdamLinearModel)
        assert isinstance(create_model('OLS'), LeastSquaresModel)

    def test_unknown_solver(self):
        with pytest.raises(ValueError):
            create_model('xgboost')
