#Base Model Module.

from abc import ABC, abstractmethod
from dataclasses import asdict, is_dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import joblib
import numpy as np
import pandas as pd

from automl.config.config import MODELS_DIR, Algorithm, ModelType
from automl.errors import DimensionMismatch
from automl.models.metrics import compute_for
from automl.utils.logger import get_logger

logger = get_logger(__name__)


class BaseModel(ABC):
    """
    Abstract base class for every estimator wrapper.

    Gives regressors and classifiers one ``fit``/``predict`` interface so the
    comparison runner can drive them without knowing the algorithm.
    """

    algorithm: Algorithm = None
    model_type: ModelType = None

    def __init__(self, params: Any = None, random_state: Optional[int] = None, model_name: str = None):

        # Initialize BaseModel.

        self.params = params
        self.random_state = random_state
        self.model_name = model_name or (self.algorithm.value if self.algorithm else type(self).__name__)
        self.model = None
        self.is_fitted = False
        self.training_timestamp = None
        self.feature_names = None
        self.n_features = None
        logger.debug(f"Initialized {self.model_name}")

    @abstractmethod
    def _create_model(self) -> Any:
        """Create the underlying sklearn estimator. To be implemented by subclasses."""
        pass

    def _param_dict(self) -> Dict[str, Any]:
        if self.params is None:
            return {}
        if is_dataclass(self.params):
            return asdict(self.params)
        return dict(self.params)

    def fit(
        self,
        X: Union[pd.DataFrame, np.ndarray],
        y: Union[pd.Series, np.ndarray]
    ) -> 'BaseModel':

        # Fit a fresh estimator to training data.

        logger.info(f"Training {self.model_name}...")

        self.model = self._create_model()

        if isinstance(X, pd.DataFrame):
            self.feature_names = X.columns.tolist()
        self.n_features = int(np.shape(X)[1])

        self.model.fit(X, y)
        self.is_fitted = True
        self.training_timestamp = datetime.now()

        logger.info(f"{self.model_name} training completed at {self.training_timestamp}")
        return self

    def predict(self, X: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:

        # Make predictions on new data.

        if not self.is_fitted:
            raise ValueError(f"{self.model_name} must be fitted before prediction")

        width = np.shape(X)[1] if np.ndim(X) == 2 else None
        if width != self.n_features:
            raise DimensionMismatch(
                f"{self.model_name} was fitted on {self.n_features} features, got input of shape {np.shape(X)}"
            )

        return np.asarray(self.model.predict(X)).reshape(-1)

    def evaluate(
        self,
        X: Union[pd.DataFrame, np.ndarray],
        y: Union[pd.Series, np.ndarray]
    ):
        """Score predictions on ``X`` against ``y`` with the metric set of this model type."""
        metrics = compute_for(self.model_type, self.predict(X), y)

        logger.info(f"{self.model_name} Evaluation Metrics:")
        for name, value in asdict(metrics).items():
            logger.info(f"  {name}: {value:.4f}")

        return metrics

    def save_model(self, filepath: Path = None) -> Path:

        # Save the trained model to disk.

        if not self.is_fitted:
            raise ValueError(f"{self.model_name} must be fitted before saving")

        if filepath is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"{self.model_name.lower().replace(' ', '_')}_{timestamp}.joblib"
            filepath = MODELS_DIR / filename

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        model_data = {
            'model': self.model,
            'model_name': self.model_name,
            'algorithm': self.algorithm.name if self.algorithm else None,
            'params': self._param_dict(),
            'feature_names': self.feature_names,
            'n_features': self.n_features,
            'training_timestamp': self.training_timestamp,
            'random_state': self.random_state
        }

        joblib.dump(model_data, filepath)
        logger.info(f"Saved model to: {filepath}")

        return filepath

    def load_model(self, filepath: Path) -> 'BaseModel':

        # Load a trained model from disk.

        model_data = joblib.load(filepath)

        self.model = model_data['model']
        self.model_name = model_data.get('model_name', self.model_name)
        self.feature_names = model_data.get('feature_names')
        self.n_features = model_data.get('n_features')
        self.training_timestamp = model_data.get('training_timestamp')
        self.random_state = model_data.get('random_state', self.random_state)
        self.is_fitted = True

        logger.info(f"Loaded model from: {filepath}")
        return self

    def get_params(self) -> Dict[str, Any]:
        """Get estimator parameters."""
        if self.model is not None:
            return self.model.get_params()
        return self._param_dict()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(params={self.params!r}, random_state={self.random_state!r})"


class BaseRegressor(BaseModel):
    """Base class for regression wrappers."""

    model_type = ModelType.REGRESSION


class BaseClassifier(BaseModel):
    """Base class for classification wrappers."""

    model_type = ModelType.CLASSIFICATION
