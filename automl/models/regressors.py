# Regression Models Module.

import warnings

from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import ElasticNet, Lasso, LinearRegression, Ridge
from sklearn.ensemble import RandomForestRegressor
from sklearn.neighbors import KNeighborsRegressor
from sklearn.svm import SVR
from sklearn.tree import DecisionTreeRegressor

from automl.config.config import (
    Algorithm,
    DecisionTreeParameters,
    ElasticNetParameters,
    KNNParameters,
    LassoParameters,
    LinearRegressionParameters,
    RandomForestParameters,
    RidgeParameters,
    SVMParameters,
)
from automl.models.base_model import BaseRegressor

# Coordinate-descent solvers warn on slow convergence; the fit is still usable
warnings.filterwarnings('ignore', category=ConvergenceWarning)


class LinearRegressionModel(BaseRegressor):
    """
    Ordinary least squares regression.

    Serves as the baseline for comparison with more complex methods.
    """

    algorithm = Algorithm.LINEAR_REGRESSION

    def __init__(self, params: LinearRegressionParameters = None, random_state: int = None):
        """
        Initialize Linear Regression model.

        Args:
            params: Linear regression hyperparameters
            random_state: Not used by LinearRegression, kept for consistency
        """
        super().__init__(params or LinearRegressionParameters(), random_state=random_state)

    def _create_model(self) -> LinearRegression:
        return LinearRegression(fit_intercept=self.params.fit_intercept)


class RidgeRegressionModel(BaseRegressor):
    """
    Ridge Regression model with L2 regularization.

    Penalizes large coefficients; good for multicollinearity.
    """

    algorithm = Algorithm.RIDGE

    def __init__(self, params: RidgeParameters = None, random_state: int = None):
        super().__init__(params or RidgeParameters(), random_state=random_state)

    def _create_model(self) -> Ridge:
        return Ridge(
            alpha=self.params.alpha,
            solver=self.params.solver,
            fit_intercept=self.params.fit_intercept,
            random_state=self.random_state
        )


class LassoRegressionModel(BaseRegressor):
    """
    Lasso Regression model with L1 regularization.

    Drives some coefficients to zero, which makes it useful for sparse models.
    """

    algorithm = Algorithm.LASSO

    def __init__(self, params: LassoParameters = None, random_state: int = None):
        super().__init__(params or LassoParameters(), random_state=random_state)

    def _create_model(self) -> Lasso:
        return Lasso(
            alpha=self.params.alpha,
            max_iter=self.params.max_iter,
            tol=self.params.tol,
            random_state=self.random_state
        )


class ElasticNetRegressionModel(BaseRegressor):
    """Linear regression with a mixed L1/L2 penalty."""

    algorithm = Algorithm.ELASTIC_NET

    def __init__(self, params: ElasticNetParameters = None, random_state: int = None):
        super().__init__(params or ElasticNetParameters(), random_state=random_state)

    def _create_model(self) -> ElasticNet:
        return ElasticNet(
            alpha=self.params.alpha,
            l1_ratio=self.params.l1_ratio,
            max_iter=self.params.max_iter,
            tol=self.params.tol,
            random_state=self.random_state
        )


class DecisionTreeRegressorModel(BaseRegressor):
    """
    Decision Tree Regressor model.

    Non-linear model that partitions feature space based on
    decision rules. Highly interpretable but prone to overfitting.
    """

    algorithm = Algorithm.DECISION_TREE_REGRESSOR

    def __init__(self, params: DecisionTreeParameters = None, random_state: int = None):
        """
        Initialize Decision Tree Regressor.

        Args:
            params: Tree depth and split/leaf size limits
            random_state: Random seed for reproducibility
        """
        super().__init__(params or DecisionTreeParameters(), random_state=random_state)

    def _create_model(self) -> DecisionTreeRegressor:
        return DecisionTreeRegressor(
            max_depth=self.params.max_depth,
            min_samples_split=self.params.min_samples_split,
            min_samples_leaf=self.params.min_samples_leaf,
            random_state=self.random_state
        )


class RandomForestRegressorModel(BaseRegressor):
    """
    Random Forest Regressor model.

    Ensemble of decision trees that reduces overfitting through
    bagging and feature randomization.
    """

    algorithm = Algorithm.RANDOM_FOREST_REGRESSOR

    def __init__(self, params: RandomForestParameters = None, random_state: int = None):
        super().__init__(params or RandomForestParameters(), random_state=random_state)

    def _create_model(self) -> RandomForestRegressor:
        return RandomForestRegressor(
            n_estimators=self.params.n_estimators,
            max_depth=self.params.max_depth,
            min_samples_split=self.params.min_samples_split,
            min_samples_leaf=self.params.min_samples_leaf,
            max_features=self.params.max_features,
            random_state=self.random_state
        )


class KNNRegressorModel(BaseRegressor):
    """K-nearest-neighbours regression."""

    algorithm = Algorithm.KNN_REGRESSOR

    def __init__(self, params: KNNParameters = None, random_state: int = None):
        super().__init__(params or KNNParameters(), random_state=random_state)

    def _create_model(self) -> KNeighborsRegressor:
        return KNeighborsRegressor(
            n_neighbors=self.params.n_neighbors,
            weights=self.params.weights,
            algorithm=self.params.algorithm,
            metric=self.params.metric,
            p=self.params.p
        )


class SVRModel(BaseRegressor):
    """Epsilon-support vector regression."""

    algorithm = Algorithm.SVR

    def __init__(self, params: SVMParameters = None, random_state: int = None):
        super().__init__(params or SVMParameters(), random_state=random_state)

    def _create_model(self) -> SVR:
        return SVR(
            kernel=self.params.kernel,
            C=self.params.C,
            epsilon=self.params.epsilon,
            gamma=self.params.gamma,
            degree=self.params.degree,
            coef0=self.params.coef0,
            tol=self.params.tol
        )
