"""
Data Package Initialization.
"""

from .data_loader import Dataset, Split, DataLoader, split_dataset, kfold_splits

__all__ = ['Dataset', 'Split', 'DataLoader', 'split_dataset', 'kfold_splits']
