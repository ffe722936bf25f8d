"""
Modelos Lineales de Ventana para Pronóstico de Demanda
- AdamLinearModel: capa densa de una unidad ajustada con Adam (iterativo)
- LeastSquaresModel: mínimos cuadrados cerrados con scikit-learn

Ambos mapean una ventana de W días a un único valor (W pesos + 1 sesgo)
minimizando el error cuadrático medio.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression

from ..config.settings import MODEL_CONFIG

logger = logging.getLogger(__name__)


class BaseModel(ABC):
    """Clase base abstracta para los modelos de ventana"""

    def __init__(self, name: str, **kwargs):
        self.name = name
        self.is_trained = False
        self.feature_names = None
        self.weights = None
        self.bias = None
        self.loss_history = []
        self.hyperparameters = kwargs

    @abstractmethod
    def _fit(self, X: np.ndarray, y: np.ndarray):
        """Ajusta self.weights y self.bias"""
        pass

    def fit(self, X: pd.DataFrame, y: pd.Series):
        """Entrena el modelo"""
        if len(X) == 0:
            raise ValueError(f"{self.name}: no hay ejemplos de entrenamiento")
        if len(X) != len(y):
            raise ValueError(f"{self.name}: X tiene {len(X)} filas e y tiene {len(y)}")

        logger.info(f"Entrenando {self.name} con {len(X)} ejemplos...")
        self.feature_names = list(X.columns) if isinstance(X, pd.DataFrame) else None

        self._fit(np.asarray(X, dtype=float), np.asarray(y, dtype=float).reshape(-1))
        self.is_trained = True

        logger.info(f"✓ {self.name} entrenado exitosamente")
        return self

    def predict(self, X) -> np.ndarray:
        """Genera predicciones"""
        if not self.is_trained:
            raise RuntimeError(f"{self.name} no ha sido entrenado. Ejecute .fit() primero.")

        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        if X.shape[1] != len(self.weights):
            raise ValueError(f"Se esperaban {len(self.weights)} features, se recibieron {X.shape[1]}")

        return X @ self.weights + self.bias

    def predict_window(self, window: Sequence[float]) -> float:
        """Predicción escalar para una sola ventana"""
        return float(self.predict(np.asarray(window, dtype=float).reshape(1, -1))[0])

    def get_params(self) -> Dict:
        """Retorna los hiperparámetros y, si está entrenado, los coeficientes"""
        params = dict(self.hyperparameters)
        if self.is_trained:
            params['weights'] = self.weights.tolist()
            params['bias'] = float(self.bias)
        return params


class AdamLinearModel(BaseModel):
    """
    Regresión lineal ajustada por descenso de gradiente con Adam

    Réplica de una capa densa de una unidad: pesos iniciales Glorot-uniforme,
    sesgo en cero, un paso por época sobre el lote completo.
    """

    def __init__(self,
                 epochs: int = MODEL_CONFIG['epochs'],
                 learning_rate: float = MODEL_CONFIG['learning_rate'],
                 beta_1: float = MODEL_CONFIG['beta_1'],
                 beta_2: float = MODEL_CONFIG['beta_2'],
                 epsilon: float = MODEL_CONFIG['epsilon'],
                 random_seed: Optional[int] = MODEL_CONFIG['random_seed']):
        if epochs < 1:
            raise ValueError(f"epochs debe ser >= 1, se recibió {epochs}")
        if learning_rate <= 0:
            raise ValueError(f"learning_rate debe ser > 0, se recibió {learning_rate}")

        super().__init__(
            "AdamLinear",
            epochs=epochs,
            learning_rate=learning_rate,
            beta_1=beta_1,
            beta_2=beta_2,
            epsilon=epsilon,
            random_seed=random_seed,
        )
        self.epochs = epochs
        self.learning_rate = learning_rate
        self.beta_1 = beta_1
        self.beta_2 = beta_2
        self.epsilon = epsilon
        self.random_seed = random_seed

    def _initial_weights(self, n_features: int) -> np.ndarray:
        rng = np.random.default_rng(self.random_seed)
        limit = np.sqrt(6.0 / (n_features + 1))
        return rng.uniform(-limit, limit, size=n_features)

    def _fit(self, X: np.ndarray, y: np.ndarray):
        n_samples, n_features = X.shape
        w = self._initial_weights(n_features)
        b = 0.0

        m_w, v_w = np.zeros(n_features), np.zeros(n_features)
        m_b, v_b = 0.0, 0.0
        losses: List[float] = []

        for t in range(1, self.epochs + 1):
            residual = X @ w + b - y
            losses.append(float(np.mean(residual ** 2)))

            grad_w = 2.0 * (X.T @ residual) / n_samples
            grad_b = 2.0 * float(np.sum(residual)) / n_samples

            m_w = self.beta_1 * m_w + (1 - self.beta_1) * grad_w
            v_w = self.beta_2 * v_w + (1 - self.beta_2) * grad_w ** 2
            m_b = self.beta_1 * m_b + (1 - self.beta_1) * grad_b
            v_b = self.beta_2 * v_b + (1 - self.beta_2) * grad_b ** 2

            step = self.learning_rate * np.sqrt(1 - self.beta_2 ** t) / (1 - self.beta_1 ** t)
            w = w - step * m_w / (np.sqrt(v_w) + self.epsilon)
            b = b - step * m_b / (np.sqrt(v_b) + self.epsilon)

        self.weights = w
        self.bias = float(b)
        self.loss_history = losses

        logger.info(f"  MSE época 1: {losses[0]:,.2f} | época {self.epochs}: {losses[-1]:,.2f}")


class LeastSquaresModel(BaseModel):
    """Mínimos cuadrados ordinarios (solución cerrada)"""

    def __init__(self, **kwargs):
        super().__init__("LeastSquares", **kwargs)
        self.model = None

    def _fit(self, X: np.ndarray, y: np.ndarray):
        self.model = LinearRegression(**self.hyperparameters)
        self.model.fit(X, y)
        self.weights = np.asarray(self.model.coef_, dtype=float)
        self.bias = float(self.model.intercept_)

        residual = X @ self.weights + self.bias - y
        self.loss_history = [float(np.mean(residual ** 2))]

        logger.info(f"  MSE de ajuste: {self.loss_history[-1]:,.2f}")


# ============== UTILIDADES ==============

def create_model(solver: str = MODEL_CONFIG['solver'], **kwargs) -> BaseModel:
    """
    Factory function para crear modelos

    Args:
        solver: 'adam' u 'ols'
        **kwargs: Hiperparámetros del modelo

    Example:
        >>> model = create_model('adam', epochs=100)
    """
    model_map = {
        'adam': AdamLinearModel,
        'ols': LeastSquaresModel,
    }

    solver = solver.lower()

    if solver not in model_map:
        raise ValueError(f"Solver '{solver}' no reconocido. "
                         f"Opciones: {list(model_map.keys())}")

    return model_map[solver](**kwargs)
