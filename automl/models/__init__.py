"""
Models Package Initialization.

Provides the estimator wrappers, the model registry, metric calculation,
the comparison runner and report formatting.
"""

from .base_model import BaseModel, BaseRegressor, BaseClassifier
from .metrics import (
    RegressionMetrics,
    ClassificationMetrics,
    compute_metrics,
    compute_classification_metrics,
    average_metrics
)
from .regressors import (
    LinearRegressionModel,
    RidgeRegressionModel,
    LassoRegressionModel,
    ElasticNetRegressionModel,
    DecisionTreeRegressorModel,
    RandomForestRegressorModel,
    KNNRegressorModel,
    SVRModel
)
from .classifiers import (
    LogisticRegressionModel,
    DecisionTreeClassifierModel,
    RandomForestClassifierModel,
    KNNClassifierModel,
    SVCModel,
    GaussianNBModel,
    CategoricalNBModel
)
from .registry import ModelSpec, all_models, get_model_class, load_model
from .report import (
    MetricResult,
    ModelFailure,
    ComparisonReport,
    rank_results,
    format_report,
    format_settings
)
from .model_comparison import ModelComparison, compare, evaluate_model
from .plots import plot_model_comparison, plot_train_test

__all__ = [
    # Base classes
    'BaseModel',
    'BaseRegressor',
    'BaseClassifier',
    # Metrics
    'RegressionMetrics',
    'ClassificationMetrics',
    'compute_metrics',
    'compute_classification_metrics',
    'average_metrics',
    # Regressors
    'LinearRegressionModel',
    'RidgeRegressionModel',
    'LassoRegressionModel',
    'ElasticNetRegressionModel',
    'DecisionTreeRegressorModel',
    'RandomForestRegressorModel',
    'KNNRegressorModel',
    'SVRModel',
    # Classifiers
    'LogisticRegressionModel',
    'DecisionTreeClassifierModel',
    'RandomForestClassifierModel',
    'KNNClassifierModel',
    'SVCModel',
    'GaussianNBModel',
    'CategoricalNBModel',
    # Registry
    'ModelSpec',
    'all_models',
    'get_model_class',
    'load_model',
    # Comparison and reporting
    'MetricResult',
    'ModelFailure',
    'ComparisonReport',
    'rank_results',
    'format_report',
    'format_settings',
    'ModelComparison',
    'compare',
    'evaluate_model',
    # Plots
    'plot_model_comparison',
    'plot_train_test'
]
