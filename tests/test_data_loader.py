"""
Unit tests for datasets, splitting and loading.
"""

import pytest
import pandas as pd
import numpy as np
import sys
from pathlib import Path

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from automl.data.data_loader import DataLoader, Dataset, Split, split_dataset, kfold_splits
from automl.errors import DimensionMismatch, EmptyDatasetError, InvalidConfiguration


@pytest.fixture
def sample_df():
    """Numeric frame with a linear target."""
    np.random.seed(42)
    n = 100
    df = pd.DataFrame({
        'size': np.random.uniform(50, 200, n).round(1),
        'rooms': np.random.randint(1, 6, n),
        'age': np.random.uniform(0, 40, n).round(1),
    })
    df['price'] = 3 * df['size'] + 10 * df['rooms'] - df['age'] + np.random.randn(n)
    return df


@pytest.fixture
def dataset(sample_df):
    return Dataset.from_frame(sample_df, 'price')


class TestDataset:
    def test_from_frame(self, dataset):
        assert dataset.n_samples == 100
        assert dataset.n_features == 3
        assert dataset.feature_names == ('size', 'rooms', 'age')

    def test_from_frame_by_index(self, sample_df):
        ds = Dataset.from_frame(sample_df, 0)
        assert ds.feature_names == ('rooms', 'age', 'price')

    def test_numeric_column_name_beats_position(self):
        df = pd.DataFrame({"a": [1.0, 2.0, 3.0], "3": [10.0, 20.0, 30.0], "b": [0.5, 0.6, 0.7]})
        ds = Dataset.from_frame(df, 3)
        assert ds.feature_names == ("a", "b")
        np.testing.assert_array_equal(ds.targets, [10.0, 20.0, 30.0])

    def test_missing_target_column(self, sample_df):
        with pytest.raises(InvalidConfiguration):
            Dataset.from_frame(sample_df, 'fare')

    def test_row_count_mismatch(self):
        with pytest.raises(DimensionMismatch):
            Dataset.from_arrays([[1.0, 2.0], [3.0, 4.0]], [1.0])

    def test_ragged_features(self):
        with pytest.raises(DimensionMismatch):
            Dataset.from_arrays([[1.0, 2.0], [3.0]], [1.0, 2.0])

    def test_feature_name_count(self):
        with pytest.raises(DimensionMismatch):
            Dataset.from_arrays([[1.0, 2.0]], [1.0], feature_names=['a'])

    def test_arrays_are_read_only(self, dataset):
        assert not dataset.features.flags.writeable
        assert not dataset.targets.flags.writeable
        with pytest.raises(ValueError):
            dataset.features[0, 0] = 1.0

    def test_empty(self):
        ds = Dataset.from_arrays([], [])
        assert ds.is_empty
        assert len(ds) == 0


class TestSplitDataset:
    def test_partition(self, dataset):
        split = split_dataset(dataset, test_fraction=0.2, random_seed=1)
        assert len(split.test_indices) == 20
        assert len(split.train_indices) == 80
        combined = np.concatenate([split.train_indices, split.test_indices])
        assert sorted(combined.tolist()) == list(range(100))

    def test_seed_is_reproducible(self, dataset):
        first = split_dataset(dataset, random_seed=3)
        second = split_dataset(dataset, random_seed=3)
        np.testing.assert_array_equal(first.test_indices, second.test_indices)

    def test_views_follow_indices(self, dataset):
        split = split_dataset(dataset, random_seed=0)
        np.testing.assert_array_equal(split.X_test, dataset.features[split.test_indices])
        np.testing.assert_array_equal(split.y_train, dataset.targets[split.train_indices])

    def test_empty_dataset(self):
        with pytest.raises(EmptyDatasetError):
            split_dataset(Dataset.from_arrays([], []))

    def test_too_small_for_split(self):
        ds = Dataset.from_arrays([[1.0]], [1.0])
        with pytest.raises(InvalidConfiguration):
            split_dataset(ds, test_fraction=0.2)

    def test_unshuffled_keeps_row_order(self, dataset):
        split = split_dataset(dataset, test_fraction=0.2, random_seed=5, shuffle=False)
        np.testing.assert_array_equal(split.train_indices, np.arange(80))
        np.testing.assert_array_equal(split.test_indices, np.arange(80, 100))

    def test_overlapping_partitions(self, dataset):
        with pytest.raises(ValueError):
            Split(dataset, np.array([0, 1, 2]), np.array([2, 3]))


class TestKFold:
    def test_every_row_tested_once(self, dataset):
        folds = kfold_splits(dataset, n_folds=5, random_seed=0)
        assert len(folds) == 5
        tested = np.concatenate([fold.test_indices for fold in folds])
        assert sorted(tested.tolist()) == list(range(100))

    def test_unshuffled_folds_are_contiguous(self, dataset):
        folds = kfold_splits(dataset, n_folds=5, random_seed=3, shuffle=False)
        for i, fold in enumerate(folds):
            np.testing.assert_array_equal(fold.test_indices, np.arange(i * 20, (i + 1) * 20))

    def test_too_many_folds(self):
        ds = Dataset.from_arrays([[1.0], [2.0], [3.0]], [1.0, 2.0, 3.0])
        with pytest.raises(InvalidConfiguration):
            kfold_splits(ds, n_folds=4)


class TestDataLoader:
    def test_load_data_file_not_found(self):
        loader = DataLoader()
        with pytest.raises(FileNotFoundError):
            loader.load_csv(Path("nonexistent_file.csv"))

    def test_load_csv_with_header(self, sample_df, tmp_path):
        path = tmp_path / "houses.csv"
        sample_df.to_csv(path, index=False)
        ds = DataLoader().load_csv(path, target='price')
        assert ds.n_samples == 100
        np.testing.assert_allclose(ds.targets, sample_df['price'].values)

    def test_load_csv_without_header(self, tmp_path):
        path = tmp_path / "raw.csv"
        path.write_text("1,2,3\n4,5,6\n7,8,9\n")
        ds = DataLoader().load_csv(path, target=-1, header=False)
        assert ds.feature_names == ('x0', 'x1')
        np.testing.assert_array_equal(ds.targets, [3.0, 6.0, 9.0])

    def test_csv_numeric_header_as_target(self, tmp_path):
        path = tmp_path / "numbered.csv"
        path.write_text("a,3,b\n1,10,5\n2,20,6\n3,30,7\n")
        ds = DataLoader().load_csv(path, target=3)
        assert ds.feature_names == ("a", "b")
        np.testing.assert_array_equal(ds.targets, [10.0, 20.0, 30.0])

    def test_non_numeric_columns(self, tmp_path):
        path = tmp_path / "mixed.csv"
        path.write_text("city,price\nDhaka,1.0\nSylhet,2.0\n")
        with pytest.raises(InvalidConfiguration):
            DataLoader().load_csv(path, target='price')

    def test_toy_dataset(self):
        ds = DataLoader().load_toy_dataset("diabetes")
        assert ds.n_samples == 442
        assert ds.n_features == 10

    def test_unknown_toy_dataset(self):
        with pytest.raises(InvalidConfiguration):
            DataLoader().load_toy_dataset("boston")
