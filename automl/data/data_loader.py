# Data Loading and Splitting Module.
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from sklearn import datasets as sk_datasets
from sklearn.model_selection import KFold, train_test_split

from automl.errors import DimensionMismatch, EmptyDatasetError, InvalidConfiguration
from automl.utils.logger import get_logger

logger = get_logger(__name__)

TOY_DATASETS = {
    "diabetes": sk_datasets.load_diabetes,
    "breast_cancer": sk_datasets.load_breast_cancer,
    "iris": sk_datasets.load_iris,
    "wine": sk_datasets.load_wine,
}


def _read_only(array: np.ndarray) -> np.ndarray:
    array = np.array(array, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Dataset:
    """
    Immutable pair of feature matrix and target vector.

    ``features`` has shape ``(n_samples, n_features)`` and ``targets`` has
    shape ``(n_samples,)``. Both arrays are read-only so a dataset can be
    shared between concurrent model evaluations.
    """

    features: np.ndarray
    targets: np.ndarray
    feature_names: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_arrays(
        cls,
        features: Union[np.ndarray, Sequence[Sequence[float]], pd.DataFrame],
        targets: Union[np.ndarray, Sequence[float], pd.Series],
        feature_names: Optional[Sequence[str]] = None
    ) -> 'Dataset':
        """Validate and wrap array-likes; raises DimensionMismatch on shape problems."""
        if isinstance(features, pd.DataFrame) and feature_names is None:
            feature_names = [str(c) for c in features.columns]

        try:
            X = np.asarray(features, dtype=float)
        except ValueError as e:
            raise DimensionMismatch(f"Features must form a rectangular numeric matrix: {e}") from e
        y = np.asarray(targets, dtype=float)

        if X.ndim == 1 and X.size == 0:
            X = X.reshape(0, 0)
        if X.ndim != 2:
            raise DimensionMismatch(f"Features must be 2-dimensional, got shape {X.shape}")
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()
        if y.ndim != 1:
            raise DimensionMismatch(f"Targets must be 1-dimensional, got shape {y.shape}")
        if X.shape[0] != y.shape[0]:
            raise DimensionMismatch(
                f"Feature row count ({X.shape[0]}) does not match target count ({y.shape[0]})"
            )

        if feature_names is not None:
            feature_names = tuple(str(name) for name in feature_names)
            if len(feature_names) != X.shape[1]:
                raise DimensionMismatch(
                    f"Got {len(feature_names)} feature names for {X.shape[1]} features"
                )

        return cls(features=_read_only(X), targets=_read_only(y), feature_names=feature_names)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, target_column: Union[str, int]) -> 'Dataset':
        """
        Build a dataset from a DataFrame, using ``target_column`` as target.

        A column name wins over a position, so ``3`` selects a column named
        "3" when there is one and the fourth column otherwise.
        """
        if target_column not in df.columns and str(target_column) in df.columns:
            target_column = str(target_column)
        elif isinstance(target_column, int) and target_column not in df.columns:
            if not -len(df.columns) <= target_column < len(df.columns):
                raise InvalidConfiguration(
                    f"Target index {target_column} out of range for {len(df.columns)} columns"
                )
            target_column = df.columns[target_column]
        if target_column not in df.columns:
            raise InvalidConfiguration(f"Target column '{target_column}' not found in DataFrame")

        X = df.drop(columns=[target_column])
        y = df[target_column]
        return cls.from_arrays(X, y)

    @property
    def n_samples(self) -> int:
        return int(self.features.shape[0])

    @property
    def n_features(self) -> int:
        return int(self.features.shape[1])

    @property
    def is_empty(self) -> bool:
        return self.n_samples == 0

    def __len__(self) -> int:
        return self.n_samples


@dataclass(frozen=True, eq=False)
class Split:
    """Train/test partition of a dataset by row index."""

    dataset: Dataset
    train_indices: np.ndarray
    test_indices: np.ndarray

    def __post_init__(self):
        train = np.asarray(self.train_indices)
        test = np.asarray(self.test_indices)
        if len(train) == 0 or len(test) == 0:
            raise InvalidConfiguration("Both training and testing partitions must be non-empty")
        if np.intersect1d(train, test).size:
            raise ValueError("Training and testing partitions overlap")
        object.__setattr__(self, "train_indices", _read_only(train))
        object.__setattr__(self, "test_indices", _read_only(test))

    @property
    def X_train(self) -> np.ndarray:
        return self.dataset.features[self.train_indices]

    @property
    def y_train(self) -> np.ndarray:
        return self.dataset.targets[self.train_indices]

    @property
    def X_test(self) -> np.ndarray:
        return self.dataset.features[self.test_indices]

    @property
    def y_test(self) -> np.ndarray:
        return self.dataset.targets[self.test_indices]


def _require_rows(dataset: Dataset) -> None:
    if dataset.is_empty:
        raise EmptyDatasetError("Cannot split an empty dataset")


def split_dataset(
    dataset: Dataset,
    test_fraction: float = 0.2,
    random_seed: Optional[int] = None,
    shuffle: bool = True
) -> Split:
    """
    Partition ``dataset`` into training and testing rows.

    The shuffle is reproducible when ``random_seed`` is given and
    non-deterministic otherwise. With ``shuffle=False`` the last rows form
    the testing part and the seed is ignored.
    """
    _require_rows(dataset)
    if not 0.0 < test_fraction < 1.0:
        raise InvalidConfiguration(f"test_fraction must be in (0, 1), got {test_fraction}")

    indices = np.arange(dataset.n_samples)
    try:
        train_idx, test_idx = train_test_split(
            indices, test_size=test_fraction,
            random_state=random_seed if shuffle else None, shuffle=shuffle
        )
    except ValueError as e:
        raise InvalidConfiguration(
            f"Dataset with {dataset.n_samples} rows is too small for test_fraction={test_fraction}: {e}"
        ) from e

    logger.info(f"Train set size: {len(train_idx)}, Test set size: {len(test_idx)}")
    return Split(dataset, np.sort(train_idx), np.sort(test_idx))


def kfold_splits(
    dataset: Dataset,
    n_folds: int = 5,
    random_seed: Optional[int] = None,
    shuffle: bool = True
) -> List[Split]:
    """K-fold partitions (shuffled by default); every row lands in exactly one testing fold."""
    _require_rows(dataset)
    if n_folds < 2:
        raise InvalidConfiguration(f"n_folds must be >= 2, got {n_folds}")
    if n_folds > dataset.n_samples:
        raise InvalidConfiguration(
            f"Cannot make {n_folds} folds from {dataset.n_samples} rows"
        )

    kfold = KFold(n_splits=n_folds, shuffle=shuffle, random_state=random_seed if shuffle else None)
    folds = [
        Split(dataset, train_idx, test_idx)
        for train_idx, test_idx in kfold.split(dataset.features)
    ]
    logger.info(f"Built {n_folds} cross-validation folds over {dataset.n_samples} rows")
    return folds


class DataLoader:
    """
    Dataset loading helpers.

    Reads CSV files with pandas or pulls the scikit-learn toy datasets, and
    returns validated ``Dataset`` objects.
    """

    def load_csv(
        self,
        file_path: Union[str, Path],
        target: Union[str, int] = -1,
        header: bool = True
    ) -> Dataset:
        """
        Load a CSV file with numeric columns.

        Args:
            file_path: Path to the CSV file
            target: Target column name, or its position (default: last column)
            header: Whether the first line holds column names

        Returns:
            Dataset with every other column as a feature
        """
        file_path = Path(file_path)
        logger.info(f"Loading dataset from: {file_path}")

        if not file_path.exists():
            error_msg = f"Dataset not found at {file_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        try:
            df = pd.read_csv(file_path, header=0 if header else None, encoding='utf-8')
        except UnicodeDecodeError:
            logger.warning("UTF-8 decoding failed, trying latin-1 encoding")
            df = pd.read_csv(file_path, header=0 if header else None, encoding='latin-1')

        if not header:
            df.columns = [f"x{i}" for i in range(len(df.columns))]
        logger.info(f"Successfully loaded dataset with shape: {df.shape}")

        non_numeric = df.select_dtypes(exclude=[np.number]).columns.tolist()
        if non_numeric:
            raise InvalidConfiguration(f"Non-numeric columns are not supported: {non_numeric}")

        return Dataset.from_frame(df, target)

    def load_toy_dataset(self, name: str) -> Dataset:
        """Load one of the bundled scikit-learn datasets by name."""
        key = name.strip().lower().replace("-", "_")
        if key not in TOY_DATASETS:
            raise InvalidConfiguration(
                f"Unknown dataset '{name}'; expected one of {sorted(TOY_DATASETS)}"
            )
        bunch = TOY_DATASETS[key]()
        logger.info(f"Loaded toy dataset '{key}' with shape {bunch.data.shape}")
        return Dataset.from_arrays(bunch.data, bunch.target, feature_names=bunch.feature_names)
