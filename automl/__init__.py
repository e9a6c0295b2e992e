"""
AutoML model comparison.

Fits a fixed roster of scikit-learn models on one dataset, scores them on a
shared train/test split and prints a ranked table.
"""

import logging

from .errors import (
    AutoMLError,
    DimensionMismatch,
    EmptyDatasetError,
    InvalidConfiguration,
    ModelFitFailure
)
from .config import Algorithm, ComparisonConfig, Metric, ModelType
from .data import Dataset, Split, DataLoader, split_dataset, kfold_splits
from .models import (
    ComparisonReport,
    MetricResult,
    ModelComparison,
    ModelFailure,
    ModelSpec,
    all_models,
    compare,
    compute_metrics,
    format_report,
    format_settings,
    rank_results
)

__version__ = "0.1.0"

logging.getLogger("automl").addHandler(logging.NullHandler())

__all__ = [
    'AutoMLError',
    'DimensionMismatch',
    'EmptyDatasetError',
    'InvalidConfiguration',
    'ModelFitFailure',
    'Algorithm',
    'ComparisonConfig',
    'Metric',
    'ModelType',
    'Dataset',
    'Split',
    'DataLoader',
    'split_dataset',
    'kfold_splits',
    'ComparisonReport',
    'MetricResult',
    'ModelComparison',
    'ModelFailure',
    'ModelSpec',
    'all_models',
    'compare',
    'compute_metrics',
    'format_report',
    'format_settings',
    'rank_results'
]
