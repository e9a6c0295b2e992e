"""
Model Registry.

Declares the fixed, ordered set of candidate models for each model type.
Nothing is fitted here: each ``ModelSpec`` only knows how to build a fresh
wrapper with its hyperparameters.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

import joblib

from automl.config.config import Algorithm, ComparisonConfig, ModelType, comparison_config
from automl.errors import InvalidConfiguration
from automl.models.base_model import BaseModel
from automl.models.classifiers import (
    CategoricalNBModel,
    DecisionTreeClassifierModel,
    GaussianNBModel,
    KNNClassifierModel,
    LogisticRegressionModel,
    RandomForestClassifierModel,
    SVCModel,
)
from automl.models.regressors import (
    DecisionTreeRegressorModel,
    ElasticNetRegressionModel,
    KNNRegressorModel,
    LassoRegressionModel,
    LinearRegressionModel,
    RandomForestRegressorModel,
    RidgeRegressionModel,
    SVRModel,
)
from automl.utils.logger import get_logger

logger = get_logger(__name__)

# (algorithm, wrapper class, ComparisonConfig attribute holding its hyperparameters)
REGRESSION_MODELS = (
    (Algorithm.LINEAR_REGRESSION, LinearRegressionModel, "linear"),
    (Algorithm.RIDGE, RidgeRegressionModel, "ridge"),
    (Algorithm.LASSO, LassoRegressionModel, "lasso"),
    (Algorithm.ELASTIC_NET, ElasticNetRegressionModel, "elastic_net"),
    (Algorithm.DECISION_TREE_REGRESSOR, DecisionTreeRegressorModel, "decision_tree"),
    (Algorithm.RANDOM_FOREST_REGRESSOR, RandomForestRegressorModel, "random_forest"),
    (Algorithm.KNN_REGRESSOR, KNNRegressorModel, "knn"),
    (Algorithm.SVR, SVRModel, "svm"),
)

CLASSIFICATION_MODELS = (
    (Algorithm.LOGISTIC_REGRESSION, LogisticRegressionModel, "logistic"),
    (Algorithm.DECISION_TREE_CLASSIFIER, DecisionTreeClassifierModel, "decision_tree"),
    (Algorithm.RANDOM_FOREST_CLASSIFIER, RandomForestClassifierModel, "random_forest"),
    (Algorithm.KNN_CLASSIFIER, KNNClassifierModel, "knn"),
    (Algorithm.SVC, SVCModel, "svm"),
    (Algorithm.GAUSSIAN_NB, GaussianNBModel, "gaussian_nb"),
    (Algorithm.CATEGORICAL_NB, CategoricalNBModel, "categorical_nb"),
)

MODEL_TABLES = {
    ModelType.REGRESSION: REGRESSION_MODELS,
    ModelType.CLASSIFICATION: CLASSIFICATION_MODELS,
}

ALGORITHM_CLASSES: Dict[Algorithm, Type[BaseModel]] = {
    algorithm: model_class
    for table in MODEL_TABLES.values()
    for algorithm, model_class, _ in table
}


@dataclass(frozen=True)
class ModelSpec:
    """
    Named, buildable model configuration.

    ``fit`` always starts from a fresh estimator, so one spec can be fitted
    on several folds or threads without sharing state.
    """

    name: str
    algorithm: Optional[Algorithm]
    model_class: Type[BaseModel]
    params: Any = None
    random_state: Optional[int] = None

    def build(self) -> BaseModel:
        model = self.model_class(params=self.params, random_state=self.random_state)
        model.model_name = self.name
        return model

    def fit(self, X, y) -> BaseModel:
        """Build and fit a new model; returns the fitted wrapper."""
        return self.build().fit(X, y)


def all_models(config: ComparisonConfig = None) -> List[ModelSpec]:
    """
    Get the ordered list of candidate models for ``config.model_type``.

    Algorithms listed in ``config.skip`` are left out. Each spec gets a copy
    of its family's hyperparameters and ``config.random_seed`` as random state.
    """
    config = config or comparison_config
    config.validate()

    specs = []
    for algorithm, model_class, section in MODEL_TABLES[config.model_type]:
        if algorithm in config.skip:
            logger.info(f"Skipping {algorithm.value}")
            continue
        specs.append(ModelSpec(
            name=algorithm.value,
            algorithm=algorithm,
            model_class=model_class,
            params=replace(getattr(config, section)),
            random_state=config.random_seed,
        ))

    return specs


def get_model_class(algorithm: Algorithm) -> Type[BaseModel]:
    try:
        return ALGORITHM_CLASSES[Algorithm.parse(algorithm)]
    except KeyError:
        raise InvalidConfiguration(f"No model registered for {algorithm}") from None


def load_model(filepath: Path) -> BaseModel:
    """Load a model saved with ``BaseModel.save_model`` into the matching wrapper class."""
    model_data = joblib.load(filepath)
    algorithm = model_data.get('algorithm')
    if algorithm is None:
        raise InvalidConfiguration(f"{filepath} does not record which algorithm it holds")
    return get_model_class(Algorithm[algorithm])().load_model(filepath)
