# Classification Models Module.

from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.naive_bayes import CategoricalNB, GaussianNB
from sklearn.neighbors import KNeighborsClassifier
from sklearn.svm import SVC
from sklearn.tree import DecisionTreeClassifier

from automl.config.config import (
    Algorithm,
    CategoricalNBParameters,
    DecisionTreeParameters,
    GaussianNBParameters,
    KNNParameters,
    LogisticRegressionParameters,
    RandomForestParameters,
    SVMParameters,
)
from automl.models.base_model import BaseClassifier


class LogisticRegressionModel(BaseClassifier):
    """
    Logistic Regression classifier.

    Linear baseline for classification comparisons.
    """

    algorithm = Algorithm.LOGISTIC_REGRESSION

    def __init__(self, params: LogisticRegressionParameters = None, random_state: int = None):
        super().__init__(params or LogisticRegressionParameters(), random_state=random_state)

    def _create_model(self) -> LogisticRegression:
        return LogisticRegression(
            C=self.params.C,
            max_iter=self.params.max_iter,
            random_state=self.random_state
        )


class DecisionTreeClassifierModel(BaseClassifier):
    algorithm = Algorithm.DECISION_TREE_CLASSIFIER

    def __init__(self, params: DecisionTreeParameters = None, random_state: int = None):
        super().__init__(params or DecisionTreeParameters(), random_state=random_state)

    def _create_model(self) -> DecisionTreeClassifier:
        return DecisionTreeClassifier(
            max_depth=self.params.max_depth,
            min_samples_split=self.params.min_samples_split,
            min_samples_leaf=self.params.min_samples_leaf,
            random_state=self.random_state
        )


class RandomForestClassifierModel(BaseClassifier):
    algorithm = Algorithm.RANDOM_FOREST_CLASSIFIER

    def __init__(self, params: RandomForestParameters = None, random_state: int = None):
        super().__init__(params or RandomForestParameters(), random_state=random_state)

    def _create_model(self) -> RandomForestClassifier:
        return RandomForestClassifier(
            n_estimators=self.params.n_estimators,
            max_depth=self.params.max_depth,
            min_samples_split=self.params.min_samples_split,
            min_samples_leaf=self.params.min_samples_leaf,
            max_features=self.params.max_features,
            random_state=self.random_state
        )


class KNNClassifierModel(BaseClassifier):
    algorithm = Algorithm.KNN_CLASSIFIER

    def __init__(self, params: KNNParameters = None, random_state: int = None):
        super().__init__(params or KNNParameters(), random_state=random_state)

    def _create_model(self) -> KNeighborsClassifier:
        return KNeighborsClassifier(
            n_neighbors=self.params.n_neighbors,
            weights=self.params.weights,
            algorithm=self.params.algorithm,
            metric=self.params.metric,
            p=self.params.p
        )


class SVCModel(BaseClassifier):
    """C-support vector classification. ``epsilon`` from the shared SVM settings is ignored."""

    algorithm = Algorithm.SVC

    def __init__(self, params: SVMParameters = None, random_state: int = None):
        super().__init__(params or SVMParameters(), random_state=random_state)

    def _create_model(self) -> SVC:
        return SVC(
            kernel=self.params.kernel,
            C=self.params.C,
            gamma=self.params.gamma,
            degree=self.params.degree,
            coef0=self.params.coef0,
            tol=self.params.tol,
            random_state=self.random_state
        )


class GaussianNBModel(BaseClassifier):
    algorithm = Algorithm.GAUSSIAN_NB

    def __init__(self, params: GaussianNBParameters = None, random_state: int = None):
        super().__init__(params or GaussianNBParameters(), random_state=random_state)

    def _create_model(self) -> GaussianNB:
        return GaussianNB(var_smoothing=self.params.var_smoothing)


class CategoricalNBModel(BaseClassifier):
    """
    Naive Bayes for categorical features.

    Features are expected to be non-negative integer category codes.
    Negative values, or categories unseen during training, make scikit-learn
    raise, and the comparison records the model as failed.
    """

    algorithm = Algorithm.CATEGORICAL_NB

    def __init__(self, params: CategoricalNBParameters = None, random_state: int = None):
        super().__init__(params or CategoricalNBParameters(), random_state=random_state)

    def _create_model(self) -> CategoricalNB:
        return CategoricalNB(alpha=self.params.alpha)
