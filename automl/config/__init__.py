"""
Config Package Initialization.
"""

from .config import (
    OUTPUTS_DIR,
    MODELS_DIR,
    PLOTS_DIR,
    REPORTS_DIR,
    LOGS_DIR,
    comparison_config,
    logging_config,
    Algorithm,
    Metric,
    ModelType,
    ComparisonConfig,
    LoggingConfig,
    LinearRegressionParameters,
    RidgeParameters,
    LassoParameters,
    ElasticNetParameters,
    DecisionTreeParameters,
    RandomForestParameters,
    KNNParameters,
    SVMParameters,
    LogisticRegressionParameters,
    GaussianNBParameters,
    CategoricalNBParameters,
)

__all__ = [
    'OUTPUTS_DIR',
    'MODELS_DIR',
    'PLOTS_DIR',
    'REPORTS_DIR',
    'LOGS_DIR',
    'comparison_config',
    'logging_config',
    'Algorithm',
    'Metric',
    'ModelType',
    'ComparisonConfig',
    'LoggingConfig',
    'LinearRegressionParameters',
    'RidgeParameters',
    'LassoParameters',
    'ElasticNetParameters',
    'DecisionTreeParameters',
    'RandomForestParameters',
    'KNNParameters',
    'SVMParameters',
    'LogisticRegressionParameters',
    'GaussianNBParameters',
    'CategoricalNBParameters',
]
