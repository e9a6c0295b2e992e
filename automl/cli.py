"""
Model Comparison - Command-line interface.

Usage:
    automl-compare --dataset diabetes
    automl-compare --data prices.csv --target price --seed 42
    automl-compare --dataset iris --classification --sort-by accuracy --train-test
    python -m automl --dataset diabetes --cv-folds 5 --n-jobs 4 --timeout 30
"""

import argparse
import sys
from typing import List, Optional, Union

from automl.config.config import Algorithm, ComparisonConfig, ModelType
from automl.data.data_loader import TOY_DATASETS, DataLoader, Dataset
from automl.errors import AutoMLError
from automl.models.model_comparison import ModelComparison
from automl.models.report import format_report, format_settings
from automl.utils.logger import get_logger

logger = get_logger(__name__)

# Toy datasets whose targets are class labels
CLASSIFICATION_DATASETS = {"breast_cancer", "iris", "wine"}


def _target(value: str) -> Union[str, int]:
    """Column name, or a column index when the value is an integer."""
    try:
        return int(value)
    except ValueError:
        return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="automl-compare",
        description="Fit a roster of models on one dataset and print a ranked comparison",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    automl-compare --dataset diabetes                    # Built-in regression dataset
    automl-compare --data data.csv --target price        # Your own CSV
    automl-compare --dataset iris --train-test           # Training and testing scores
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--data', '-d',
        type=str,
        help='Path to a numeric CSV file'
    )
    source.add_argument(
        '--dataset',
        choices=sorted(TOY_DATASETS),
        help='Use a built-in toy dataset'
    )

    parser.add_argument(
        '--target', '-t',
        type=_target,
        default=-1,
        help='Target column name or index (default: last column)'
    )
    parser.add_argument(
        '--no-header',
        action='store_true',
        help='The CSV file has no header row'
    )
    parser.add_argument(
        '--classification',
        action='store_true',
        help='Compare classifiers instead of regressors'
    )
    parser.add_argument(
        '--test-fraction',
        type=float,
        default=0.2,
        help='Fraction of rows held out for testing (default: 0.2)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for the split and the models'
    )
    parser.add_argument(
        '--no-shuffle',
        action='store_true',
        help='Keep row order: the last rows become the test set'
    )
    parser.add_argument(
        '--sort-by',
        type=str,
        default=None,
        help='Ranking metric, e.g. r2, mse, mae, explained_variance, accuracy'
    )
    parser.add_argument(
        '--cv-folds',
        type=int,
        default=None,
        help='Use K-fold cross-validation instead of a single split'
    )
    parser.add_argument(
        '--skip',
        nargs='+',
        default=[],
        metavar='ALGORITHM',
        help=f"Algorithms to leave out ({', '.join(a.name.lower() for a in Algorithm)})"
    )
    parser.add_argument(
        '--n-jobs',
        type=int,
        default=1,
        help='Number of models evaluated concurrently (default: 1)'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        default=None,
        help='Seconds a single model may take before it is marked as failed'
    )
    parser.add_argument(
        '--train-test',
        action='store_true',
        help='Show training and testing scores side by side'
    )
    parser.add_argument(
        '--show-time',
        action='store_true',
        help='Add a column with each model\'s evaluation time'
    )
    parser.add_argument(
        '--show-settings',
        action='store_true',
        help='Print the active settings before the results'
    )
    parser.add_argument(
        '--save-model',
        type=str,
        default=None,
        metavar='PATH',
        help='Refit the best model on all rows and save it to PATH'
    )
    parser.add_argument(
        '--plot',
        type=str,
        default=None,
        metavar='DIR',
        help='Save comparison charts to DIR'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log progress to stderr'
    )

    return parser


def load_dataset(args: argparse.Namespace) -> Dataset:
    loader = DataLoader()
    if args.dataset:
        return loader.load_toy_dataset(args.dataset)
    return loader.load_csv(args.data, target=args.target, header=not args.no_header)


def build_config(args: argparse.Namespace) -> ComparisonConfig:
    classification = args.classification or args.dataset in CLASSIFICATION_DATASETS
    return ComparisonConfig(
        model_type=ModelType.CLASSIFICATION if classification else ModelType.REGRESSION,
        test_fraction=args.test_fraction,
        random_seed=args.seed,
        shuffle=not args.no_shuffle,
        sort_metric=args.sort_by,
        cv_folds=args.cv_folds,
        skip=list(args.skip),
        n_jobs=args.n_jobs,
        fit_timeout=args.timeout,
        verbose=args.verbose,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = build_config(args)
        dataset = load_dataset(args)

        if args.show_settings:
            print(format_settings(config))

        comparison = ModelComparison(dataset, config)
        report = comparison.compare()
        print(format_report(report, train_test=args.train_test, show_time=args.show_time), end="")

        if args.save_model:
            comparison.train_final_model()
            path = comparison.save_final_model(args.save_model)
            print(f"\nSaved {comparison.final_model.model_name} to {path}")

        if args.plot:
            for path in comparison.plot_results(args.plot):
                print(f"Saved plot to {path}")
    except (AutoMLError, FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
