"""
Tests for the comparison plots.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from automl.config.config import Metric
from automl.models.metrics import RegressionMetrics
from automl.models.plots import plot_model_comparison, plot_train_test
from automl.models.report import MetricResult, ModelFailure, rank_results


def make_report():
    results = [
        MetricResult("Alpha", None,
                     RegressionMetrics(r2=0.9, mse=1.0, mae=0.8, explained_variance=0.9),
                     RegressionMetrics(r2=0.7, mse=2.0, mae=1.1, explained_variance=0.7), 0.1),
        MetricResult("Beta", None,
                     RegressionMetrics(r2=0.8, mse=1.5, mae=0.9, explained_variance=0.8),
                     RegressionMetrics(r2=0.75, mse=1.8, mae=1.0, explained_variance=0.75), 0.2),
    ]
    return rank_results(results, Metric.R2)


class TestPlots:
    def test_model_comparison(self, tmp_path):
        path = plot_model_comparison(make_report(), save_path=tmp_path / "comparison.png")
        assert path.exists()

    def test_other_metric(self, tmp_path):
        path = plot_model_comparison(make_report(), metric="mse", save_path=tmp_path / "mse.png")
        assert path.exists()

    def test_train_test(self, tmp_path):
        path = plot_train_test(make_report(), save_path=tmp_path / "train_test.png")
        assert path.exists()

    def test_nothing_to_plot(self, tmp_path):
        report = rank_results([ModelFailure("Broken", None, "boom")], Metric.R2)
        assert plot_model_comparison(report, save_path=tmp_path / "none.png") is None
        assert plot_train_test(report, save_path=tmp_path / "none.png") is None
