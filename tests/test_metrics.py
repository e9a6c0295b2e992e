"""
Unit tests for the metric calculator.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from automl.config.config import Metric, ModelType
from automl.errors import DimensionMismatch
from automl.models.metrics import (
    RegressionMetrics,
    ClassificationMetrics,
    compute_metrics,
    compute_classification_metrics,
    compute_for,
    average_metrics,
)


class TestComputeMetrics:
    def test_perfect_predictions(self):
        actual = [1.0, 2.0, 3.0, 4.0]
        metrics = compute_metrics(actual, actual)
        assert metrics.r2 == pytest.approx(1.0)
        assert metrics.mse == pytest.approx(0.0)
        assert metrics.mae == pytest.approx(0.0)
        assert metrics.explained_variance == pytest.approx(1.0)

    def test_known_values(self):
        metrics = compute_metrics([1.0, 2.0, 3.0, 5.0], [1.0, 2.0, 3.0, 4.0])
        assert metrics.mse == pytest.approx(0.25)
        assert metrics.mae == pytest.approx(0.25)
        assert metrics.r2 == pytest.approx(0.8)
        assert metrics.explained_variance == pytest.approx(0.85)

    def test_constant_actual_values(self):
        metrics = compute_metrics([1.0, 2.0, 3.0], [2.0, 2.0, 2.0])
        assert metrics.r2 == 0.0
        assert metrics.explained_variance == 0.0
        assert metrics.mse == pytest.approx(2.0 / 3.0)

    def test_constant_values_with_rounding_noise(self):
        # mean of three 0.1s is not exactly 0.1, so the variance is tiny but non-zero
        actual = np.full(3, 0.1)
        metrics = compute_metrics(actual + [-0.01, 0.0, 0.01], actual)
        assert metrics.r2 == 0.0
        assert metrics.explained_variance == 0.0
        assert metrics.mae == pytest.approx(0.02 / 3)

    def test_ranges_on_random_data(self):
        np.random.seed(42)
        actual = np.random.randn(50)
        predicted = np.random.randn(50)
        metrics = compute_metrics(predicted, actual)
        assert metrics.mse >= 0
        assert metrics.mae >= 0
        assert metrics.r2 <= 1.0
        assert metrics.explained_variance <= 1.0

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatch):
            compute_metrics([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_empty_vectors(self):
        with pytest.raises(DimensionMismatch):
            compute_metrics([], [])

    def test_value_lookup(self):
        metrics = RegressionMetrics(r2=0.9, mse=1.5, mae=1.0, explained_variance=0.91)
        assert metrics.value(Metric.R2) == 0.9
        assert metrics.value(Metric.MSE) == 1.5
        assert metrics.value(Metric.MAE) == 1.0
        assert metrics.value(Metric.EXPLAINED_VARIANCE) == 0.91


class TestClassificationMetrics:
    def test_known_values(self):
        metrics = compute_classification_metrics([0, 1, 0, 0], [0, 1, 1, 0])
        assert metrics.accuracy == pytest.approx(0.75)
        assert metrics.balanced_accuracy == pytest.approx(0.75)
        assert metrics.f1_macro == pytest.approx((0.8 + 2.0 / 3.0) / 2)

    def test_dispatch_by_model_type(self):
        assert isinstance(compute_for(ModelType.REGRESSION, [1, 2], [1, 3]), RegressionMetrics)
        assert isinstance(compute_for(ModelType.CLASSIFICATION, [1, 2], [1, 3]), ClassificationMetrics)

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatch):
            compute_classification_metrics([0, 1], [0])


class TestAverageMetrics:
    def test_field_wise_mean(self):
        scores = [
            RegressionMetrics(r2=0.5, mse=2.0, mae=1.0, explained_variance=0.6),
            RegressionMetrics(r2=0.7, mse=4.0, mae=3.0, explained_variance=0.8),
        ]
        mean = average_metrics(scores)
        assert isinstance(mean, RegressionMetrics)
        assert mean.r2 == pytest.approx(0.6)
        assert mean.mse == pytest.approx(3.0)
        assert mean.mae == pytest.approx(2.0)
        assert mean.explained_variance == pytest.approx(0.7)
