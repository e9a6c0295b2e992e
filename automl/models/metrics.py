"""
Evaluation metrics.

Regression metrics follow the usual definitions with one convention: when
the actual values are constant (zero variance), R^2 and explained variance
are reported as 0.0 instead of being undefined.
"""

from dataclasses import dataclass, fields
from typing import Sequence, Tuple, Union

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    balanced_accuracy_score,
    explained_variance_score,
    f1_score,
    mean_absolute_error,
    mean_squared_error,
    r2_score,
)

from automl.config.config import Metric, ModelType
from automl.errors import DimensionMismatch

ArrayLike = Union[np.ndarray, Sequence[float]]


@dataclass(frozen=True)
class RegressionMetrics:
    """Fit quality of one prediction vector against the actual values."""

    r2: float
    mse: float
    mae: float
    explained_variance: float

    def value(self, metric: Metric) -> float:
        return {
            Metric.R2: self.r2,
            Metric.MSE: self.mse,
            Metric.MAE: self.mae,
            Metric.EXPLAINED_VARIANCE: self.explained_variance,
        }[metric]


@dataclass(frozen=True)
class ClassificationMetrics:
    """Label agreement of one prediction vector with the actual labels."""

    accuracy: float
    balanced_accuracy: float
    f1_macro: float

    def value(self, metric: Metric) -> float:
        return {
            Metric.ACCURACY: self.accuracy,
            Metric.BALANCED_ACCURACY: self.balanced_accuracy,
            Metric.F1_MACRO: self.f1_macro,
        }[metric]


def _as_vectors(predicted: ArrayLike, actual: ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    y_pred = np.asarray(predicted, dtype=float).reshape(-1)
    y_true = np.asarray(actual, dtype=float).reshape(-1)
    if y_pred.shape[0] != y_true.shape[0]:
        raise DimensionMismatch(
            f"Got {y_pred.shape[0]} predictions for {y_true.shape[0]} actual values"
        )
    if y_true.shape[0] == 0:
        raise DimensionMismatch("Cannot compute metrics on empty vectors")
    return y_pred, y_true


def compute_metrics(predicted: ArrayLike, actual: ArrayLike) -> RegressionMetrics:
    """
    Compute R^2, MSE, MAE and explained variance.

    Args:
        predicted: Model predictions
        actual: Ground-truth values, same length as ``predicted``

    Returns:
        RegressionMetrics

    Raises:
        DimensionMismatch: lengths differ or are zero
    """
    y_pred, y_true = _as_vectors(predicted, actual)

    if np.ptp(y_true) == 0.0:
        r2 = 0.0
        explained_variance = 0.0
    else:
        r2 = float(r2_score(y_true, y_pred))
        explained_variance = float(explained_variance_score(y_true, y_pred))

    return RegressionMetrics(
        r2=r2,
        mse=float(mean_squared_error(y_true, y_pred)),
        mae=float(mean_absolute_error(y_true, y_pred)),
        explained_variance=explained_variance,
    )


def compute_classification_metrics(predicted: ArrayLike, actual: ArrayLike) -> ClassificationMetrics:
    """Compute accuracy, balanced accuracy and macro-averaged F1."""
    y_pred, y_true = _as_vectors(predicted, actual)
    return ClassificationMetrics(
        accuracy=float(accuracy_score(y_true, y_pred)),
        balanced_accuracy=float(balanced_accuracy_score(y_true, y_pred)),
        f1_macro=float(f1_score(y_true, y_pred, average='macro', zero_division=0)),
    )


def compute_for(model_type: ModelType, predicted: ArrayLike, actual: ArrayLike):
    """Dispatch to the metric set of ``model_type``."""
    if model_type is ModelType.CLASSIFICATION:
        return compute_classification_metrics(predicted, actual)
    return compute_metrics(predicted, actual)


def average_metrics(scores):
    """Field-wise mean of a non-empty list of metric records of one type."""
    first = scores[0]
    return type(first)(**{
        f.name: float(np.mean([getattr(score, f.name) for score in scores]))
        for f in fields(first)
    })
