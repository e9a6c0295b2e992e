"""
Unit tests for the model registry.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from automl.config.config import Algorithm, ComparisonConfig, ModelType, RidgeParameters
from automl.errors import InvalidConfiguration
from automl.models.registry import ModelSpec, all_models, get_model_class
from automl.models.regressors import RidgeRegressionModel, SVRModel


REGRESSION_NAMES = [
    "Linear Regressor",
    "Ridge Regressor",
    "LASSO Regressor",
    "Elastic Net Regressor",
    "Decision Tree Regressor",
    "Random Forest Regressor",
    "KNN Regressor",
    "Support Vector Regressor",
]

CLASSIFICATION_NAMES = [
    "Logistic Regression Classifier",
    "Decision Tree Classifier",
    "Random Forest Classifier",
    "KNN Classifier",
    "Support Vector Classifier",
    "Gaussian Naive Bayes",
    "Categorical Naive Bayes",
]


class TestAllModels:
    def test_regression_order(self):
        specs = all_models(ComparisonConfig())
        assert [spec.name for spec in specs] == REGRESSION_NAMES

    def test_classification_order(self):
        specs = all_models(ComparisonConfig.default_classification())
        assert [spec.name for spec in specs] == CLASSIFICATION_NAMES

    def test_names_are_unique(self):
        names = [spec.name for spec in all_models(ComparisonConfig())]
        assert len(names) == len(set(names))

    def test_skip(self):
        config = ComparisonConfig(skip=["svr", Algorithm.LASSO])
        names = [spec.name for spec in all_models(config)]
        assert "Support Vector Regressor" not in names
        assert "LASSO Regressor" not in names
        assert len(names) == 6

    def test_skip_reassigned_after_construction(self):
        config = ComparisonConfig()
        config.skip = ["svr", "lasso"]
        names = [spec.name for spec in all_models(config)]
        assert "Support Vector Regressor" not in names
        assert "LASSO Regressor" not in names
        assert len(names) == 6

    def test_seed_propagates(self):
        specs = all_models(ComparisonConfig(random_seed=11))
        assert all(spec.random_state == 11 for spec in specs)

    def test_params_are_copied(self):
        config = ComparisonConfig(ridge=RidgeParameters(alpha=2.0))
        ridge = next(spec for spec in all_models(config) if spec.algorithm is Algorithm.RIDGE)
        assert ridge.params == config.ridge
        assert ridge.params is not config.ridge

    def test_invalid_config_rejected(self):
        config = ComparisonConfig()
        config.n_jobs = 0
        with pytest.raises(InvalidConfiguration):
            all_models(config)


class TestModelSpec:
    def test_fit_builds_fresh_models(self):
        np.random.seed(42)
        X = np.random.randn(30, 2)
        y = X[:, 0] - X[:, 1]
        spec = ModelSpec("Ridge", Algorithm.RIDGE, RidgeRegressionModel, RidgeParameters(alpha=0.5))
        first = spec.fit(X, y)
        second = spec.fit(X, y)
        assert first is not second
        assert first.model_name == "Ridge"
        assert first.is_fitted and second.is_fitted


class TestGetModelClass:
    def test_by_member(self):
        assert get_model_class(Algorithm.SVR) is SVRModel

    def test_by_name(self):
        assert get_model_class("ridge") is RidgeRegressionModel
        assert get_model_class("Support Vector Regressor") is SVRModel

    def test_unknown(self):
        with pytest.raises(InvalidConfiguration):
            get_model_class("gradient_boosting")

    def test_model_types(self):
        for spec in all_models(ComparisonConfig()):
            assert spec.model_class.model_type is ModelType.REGRESSION
