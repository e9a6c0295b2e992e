# Configuration Management Module for the model comparison harness.

import os
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from automl.errors import InvalidConfiguration

# Output directories (created on first write, not at import)
OUTPUTS_DIR = Path(os.environ.get("AUTOML_OUTPUT_DIR", "outputs")).absolute()
MODELS_DIR = OUTPUTS_DIR / "models"
PLOTS_DIR = OUTPUTS_DIR / "plots"
REPORTS_DIR = OUTPUTS_DIR / "reports"
LOGS_DIR = OUTPUTS_DIR / "logs"


class ModelType(Enum):
    """Kind of supervised problem being compared."""

    REGRESSION = "Regression"
    CLASSIFICATION = "Classification"

    def __str__(self) -> str:
        return self.value


class Metric(Enum):
    """
    Ranking metrics.

    Each member carries its table label, whether larger values are better,
    and the model type it is computed for.
    """

    R2 = ("R^2", True, ModelType.REGRESSION)
    MSE = ("MSE", False, ModelType.REGRESSION)
    MAE = ("MAE", False, ModelType.REGRESSION)
    EXPLAINED_VARIANCE = ("Exp. Var.", True, ModelType.REGRESSION)
    ACCURACY = ("Accuracy", True, ModelType.CLASSIFICATION)
    BALANCED_ACCURACY = ("Bal. Acc.", True, ModelType.CLASSIFICATION)
    F1_MACRO = ("F1 (macro)", True, ModelType.CLASSIFICATION)

    def __init__(self, label: str, higher_is_better: bool, model_type: ModelType):
        self.label = label
        self.higher_is_better = higher_is_better
        self.model_type = model_type

    def __str__(self) -> str:
        return self.label

    @classmethod
    def for_model_type(cls, model_type: ModelType) -> List["Metric"]:
        return [metric for metric in cls if metric.model_type is model_type]

    @classmethod
    def parse(cls, value: Union[str, "Metric"]) -> "Metric":
        """Resolve a metric from a member, its name (``"r2"``) or its label (``"R^2"``)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_").replace(" ", "_")
            aliases = {"R_SQUARED": "R2", "R^2": "R2", "EV": "EXPLAINED_VARIANCE", "F1": "F1_MACRO"}
            key = aliases.get(key, key)
            if key in cls.__members__:
                return cls[key]
            for metric in cls:
                if metric.label.lower() == value.strip().lower():
                    return metric
        raise InvalidConfiguration(
            f"Unknown sort metric {value!r}; expected one of "
            f"{', '.join(m.name for m in cls)}"
        )


class Algorithm(Enum):
    """Closed set of algorithm families the registry knows how to build."""

    LINEAR_REGRESSION = "Linear Regressor"
    RIDGE = "Ridge Regressor"
    LASSO = "LASSO Regressor"
    ELASTIC_NET = "Elastic Net Regressor"
    DECISION_TREE_REGRESSOR = "Decision Tree Regressor"
    RANDOM_FOREST_REGRESSOR = "Random Forest Regressor"
    KNN_REGRESSOR = "KNN Regressor"
    SVR = "Support Vector Regressor"
    LOGISTIC_REGRESSION = "Logistic Regression Classifier"
    DECISION_TREE_CLASSIFIER = "Decision Tree Classifier"
    RANDOM_FOREST_CLASSIFIER = "Random Forest Classifier"
    KNN_CLASSIFIER = "KNN Classifier"
    SVC = "Support Vector Classifier"
    GAUSSIAN_NB = "Gaussian Naive Bayes"
    CATEGORICAL_NB = "Categorical Naive Bayes"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union[str, "Algorithm"]) -> "Algorithm":
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper().replace("-", "_").replace(" ", "_")
        if key in cls.__members__:
            return cls[key]
        for algorithm in cls:
            if algorithm.value.lower() == str(value).strip().lower():
                return algorithm
        raise InvalidConfiguration(f"Unknown algorithm {value!r}")


# Per-family hyperparameters. Defaults follow scikit-learn unless noted.

@dataclass
class LinearRegressionParameters:
    fit_intercept: bool = True


@dataclass
class RidgeParameters:
    alpha: float = 1.0
    solver: str = "auto"
    fit_intercept: bool = True


@dataclass
class LassoParameters:
    alpha: float = 1.0
    max_iter: int = 10000
    tol: float = 1e-4


@dataclass
class ElasticNetParameters:
    alpha: float = 1.0
    l1_ratio: float = 0.5  # elastic net penalty mix: 0 is ridge, 1 is lasso
    max_iter: int = 10000
    tol: float = 1e-4


@dataclass
class DecisionTreeParameters:
    max_depth: Optional[int] = None
    min_samples_split: int = 2
    min_samples_leaf: int = 1


@dataclass
class RandomForestParameters:
    n_estimators: int = 100
    max_depth: Optional[int] = None
    min_samples_split: int = 2
    min_samples_leaf: int = 1
    max_features: Union[str, float, int, None] = 1.0


@dataclass
class KNNParameters:
    n_neighbors: int = 5
    weights: str = "uniform"
    algorithm: str = "auto"
    metric: str = "minkowski"
    p: int = 2


@dataclass
class SVMParameters:
    kernel: str = "rbf"
    C: float = 1.0
    epsilon: float = 0.1  # SVR only
    gamma: Union[str, float] = "scale"
    degree: int = 3
    coef0: float = 0.0
    tol: float = 1e-3


@dataclass
class LogisticRegressionParameters:
    C: float = 1.0
    max_iter: int = 1000


@dataclass
class GaussianNBParameters:
    var_smoothing: float = 1e-9


@dataclass
class CategoricalNBParameters:
    alpha: float = 1.0  # additive (Laplace) smoothing


@dataclass
class ComparisonConfig:
    """Settings for a model comparison run."""

    model_type: ModelType = ModelType.REGRESSION

    # Train-test split
    test_fraction: float = 0.2
    random_seed: Optional[int] = None
    shuffle: bool = True

    # Ranking, defaults to R2 (regression) or Accuracy (classification)
    sort_metric: Union[Metric, str, None] = None

    # K-fold cross-validation replaces the holdout split when set
    cv_folds: Optional[int] = None

    # Algorithms left out of the comparison
    skip: List[Algorithm] = field(default_factory=list)

    # Execution
    n_jobs: int = 1
    fit_timeout: Optional[float] = None
    verbose: bool = False

    # Hyperparameters, one sub-config per family
    linear: LinearRegressionParameters = field(default_factory=LinearRegressionParameters)
    ridge: RidgeParameters = field(default_factory=RidgeParameters)
    lasso: LassoParameters = field(default_factory=LassoParameters)
    elastic_net: ElasticNetParameters = field(default_factory=ElasticNetParameters)
    decision_tree: DecisionTreeParameters = field(default_factory=DecisionTreeParameters)
    random_forest: RandomForestParameters = field(default_factory=RandomForestParameters)
    knn: KNNParameters = field(default_factory=KNNParameters)
    svm: SVMParameters = field(default_factory=SVMParameters)
    logistic: LogisticRegressionParameters = field(default_factory=LogisticRegressionParameters)
    gaussian_nb: GaussianNBParameters = field(default_factory=GaussianNBParameters)
    categorical_nb: CategoricalNBParameters = field(default_factory=CategoricalNBParameters)

    def __post_init__(self):
        self.validate()

    def _normalize(self) -> None:
        # Also covers fields reassigned after construction
        if isinstance(self.model_type, str):
            try:
                self.model_type = ModelType[self.model_type.strip().upper()]
            except KeyError:
                raise InvalidConfiguration(f"Unknown model type {self.model_type!r}") from None
        if self.sort_metric is None:
            regression = self.model_type is ModelType.REGRESSION
            self.sort_metric = Metric.R2 if regression else Metric.ACCURACY
        self.sort_metric = Metric.parse(self.sort_metric)
        self.skip = [Algorithm.parse(algorithm) for algorithm in self.skip]

    @classmethod
    def default_regression(cls, **overrides) -> "ComparisonConfig":
        overrides.setdefault("sort_metric", Metric.R2)
        return cls(model_type=ModelType.REGRESSION, **overrides)

    @classmethod
    def default_classification(cls, **overrides) -> "ComparisonConfig":
        overrides.setdefault("sort_metric", Metric.ACCURACY)
        return cls(model_type=ModelType.CLASSIFICATION, **overrides)

    def with_options(self, **changes) -> "ComparisonConfig":
        """Return a validated copy with ``changes`` applied."""
        return replace(self, **changes)

    def validate(self) -> None:
        """
        Resolve string-valued fields to their enums, then raise
        InvalidConfiguration for out-of-range or inconsistent settings.
        """
        self._normalize()
        if not isinstance(self.model_type, ModelType):
            raise InvalidConfiguration(f"Unknown model type {self.model_type!r}")

        if isinstance(self.test_fraction, bool) or not isinstance(self.test_fraction, (int, float)):
            raise InvalidConfiguration(f"test_fraction must be a number, got {self.test_fraction!r}")
        if not 0.0 < self.test_fraction < 1.0:
            raise InvalidConfiguration(f"test_fraction must be in (0, 1), got {self.test_fraction}")

        if self.sort_metric.model_type is not self.model_type:
            raise InvalidConfiguration(
                f"Sort metric {self.sort_metric.label} does not apply to {self.model_type.value.lower()} models"
            )

        if self.random_seed is not None and (
            isinstance(self.random_seed, bool) or not isinstance(self.random_seed, int) or self.random_seed < 0
        ):
            raise InvalidConfiguration(f"random_seed must be a non-negative integer, got {self.random_seed!r}")

        if self.cv_folds is not None and (not isinstance(self.cv_folds, int) or self.cv_folds < 2):
            raise InvalidConfiguration(f"cv_folds must be an integer >= 2, got {self.cv_folds!r}")

        if not isinstance(self.n_jobs, int) or self.n_jobs < 1:
            raise InvalidConfiguration(f"n_jobs must be a positive integer, got {self.n_jobs!r}")

        if self.fit_timeout is not None and not self.fit_timeout > 0:
            raise InvalidConfiguration(f"fit_timeout must be positive, got {self.fit_timeout!r}")

    def hyperparameter_sections(self):
        """Yield ``(field name, parameters dataclass)`` for every family sub-config."""
        for f in fields(self):
            value = getattr(self, f.name)
            if hasattr(value, "__dataclass_fields__"):
                yield f.name, value


@dataclass
class LoggingConfig:
    """Logging configuration parameters."""

    # Logging level
    level: str = os.environ.get("AUTOML_LOG_LEVEL", "INFO")

    # Log format
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Date format
    date_format: str = "%Y-%m-%d %H:%M:%S"

    # Log file name, written under LOGS_DIR when file logging is enabled
    log_file: str = "automl.log"
    log_to_file: bool = False


# Create default config instances
comparison_config = ComparisonConfig()
logging_config = LoggingConfig()
