"""
Model Comparison Module.

Runs every candidate model through the same split (or cross-validation
folds), scores training and testing predictions uniformly, and ranks the
results. A model that fails to fit is recorded as a failure and the rest of
the comparison carries on; only invalid caller input aborts a run.
"""

import time
from collections import deque
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np

from automl.config.config import PLOTS_DIR, REPORTS_DIR, ComparisonConfig, ModelType, comparison_config
from automl.data.data_loader import Dataset, Split, kfold_splits, split_dataset
from automl.errors import EmptyDatasetError, ModelFitFailure
from automl.models.base_model import BaseModel
from automl.models.metrics import average_metrics, compute_for
from automl.models.plots import plot_model_comparison, plot_train_test
from automl.models.registry import ModelSpec, all_models
from automl.models.report import (
    ComparisonReport,
    MetricResult,
    ModelFailure,
    Outcome,
    format_report,
    rank_results,
)
from automl.utils.logger import enable_console_logging, get_logger

logger = get_logger(__name__)

# How often the parallel runner checks running fits against the timeout
POLL_INTERVAL = 0.05


def make_folds(dataset: Dataset, config: ComparisonConfig) -> List[Split]:
    """A single holdout split, or K folds when ``config.cv_folds`` is set."""
    if config.cv_folds:
        return kfold_splits(dataset, config.cv_folds, config.random_seed, config.shuffle)
    return [split_dataset(dataset, config.test_fraction, config.random_seed, config.shuffle)]


def evaluate_model(spec: ModelSpec, folds: Sequence[Split], model_type: ModelType) -> Outcome:
    """
    Fit ``spec`` on each fold's training rows and score both partitions.

    Args:
        spec: Model to evaluate
        folds: One holdout split or several cross-validation folds
        model_type: Selects the metric set

    Returns:
        MetricResult with fold-averaged scores, or ModelFailure with a reason
    """
    start = time.perf_counter()
    train_scores, test_scores = [], []

    try:
        for fold in folds:
            model = spec.fit(fold.X_train, fold.y_train)
            train_pred = model.predict(fold.X_train)
            test_pred = model.predict(fold.X_test)

            if not (np.all(np.isfinite(train_pred)) and np.all(np.isfinite(test_pred))):
                raise ModelFitFailure(spec.name, "model produced non-finite predictions")

            train_scores.append(compute_for(model_type, train_pred, fold.y_train))
            test_scores.append(compute_for(model_type, test_pred, fold.y_test))
    except ModelFitFailure as e:
        logger.error(f"Error evaluating {spec.name}: {e.reason}")
        return ModelFailure(spec.name, spec.algorithm, e.reason)
    except Exception as e:
        reason = f"{type(e).__name__}: {e}"
        logger.error(f"Error evaluating {spec.name}: {reason}")
        return ModelFailure(spec.name, spec.algorithm, reason)

    result = MetricResult(
        name=spec.name,
        algorithm=spec.algorithm,
        train_metrics=average_metrics(train_scores),
        test_metrics=average_metrics(test_scores),
        fit_seconds=time.perf_counter() - start,
        n_folds=len(folds),
    )
    logger.info(f"Evaluated {spec.name} in {result.fit_seconds:.3f}s")
    return result


def _timeout_failure(spec: ModelSpec, timeout: float) -> ModelFailure:
    logger.error(f"{spec.name} exceeded the fit timeout of {timeout:g}s")
    return ModelFailure(spec.name, spec.algorithm, f"timeout after {timeout:g}s")


def _evaluate_pooled(specs: Sequence[ModelSpec], folds: Sequence[Split], config: ComparisonConfig) -> List[Outcome]:
    """
    Run at most ``config.n_jobs`` evaluations at once.

    Every evaluation gets its own single-worker executor. A fit that exceeds
    ``config.fit_timeout`` is recorded as a failure and its slot is handed to
    the next queued model straight away; the abandoned thread is never joined.
    """
    outcomes: List[Optional[Outcome]] = [None] * len(specs)
    queue = deque(enumerate(specs))
    running = {}  # future -> (index, start time, executor)
    poll = POLL_INTERVAL if config.fit_timeout is not None else None

    try:
        while queue or running:
            while queue and len(running) < config.n_jobs:
                index, spec = queue.popleft()
                executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="automl-fit")
                future = executor.submit(evaluate_model, spec, folds, config.model_type)
                running[future] = (index, time.monotonic(), executor)

            done, _ = wait(list(running), timeout=poll, return_when=FIRST_COMPLETED)
            for future in done:
                index, _, executor = running.pop(future)
                outcomes[index] = future.result()
                executor.shutdown(wait=False)

            if config.fit_timeout is None:
                continue
            now = time.monotonic()
            for future, (index, started, executor) in list(running.items()):
                if now - started > config.fit_timeout:
                    del running[future]
                    executor.shutdown(wait=False)
                    outcomes[index] = _timeout_failure(specs[index], config.fit_timeout)
    finally:
        for _, _, executor in running.values():
            executor.shutdown(wait=False)

    return outcomes


def evaluate_all(specs: Sequence[ModelSpec], folds: Sequence[Split], config: ComparisonConfig) -> List[Outcome]:
    """Evaluate every spec; the returned outcomes follow ``specs`` order."""
    if config.n_jobs == 1 and config.fit_timeout is None:
        return [evaluate_model(spec, folds, config.model_type) for spec in specs]
    return _evaluate_pooled(specs, folds, config)


def compare(
    dataset: Dataset,
    config: ComparisonConfig = None,
    models: Optional[Sequence[ModelSpec]] = None
) -> ComparisonReport:
    """
    Fit and score every candidate model, then rank the results.

    Args:
        dataset: Features and targets to compare on
        config: Comparison settings (defaults to ``comparison_config``)
        models: Candidate models; defaults to the registry for ``config``

    Returns:
        ComparisonReport, best model first

    Raises:
        InvalidConfiguration: bad settings, detected before any fitting
        EmptyDatasetError: ``dataset`` has no rows
    """
    config = config or comparison_config
    config.validate()

    if dataset.is_empty:
        raise EmptyDatasetError("Cannot compare models on an empty dataset")

    if config.verbose:
        enable_console_logging()

    folds = make_folds(dataset, config)
    specs = list(models) if models is not None else all_models(config)

    logger.info("=" * 60)
    logger.info(f"Comparing {len(specs)} {config.model_type.value.lower()} models "
                f"on {dataset.n_samples} rows ({len(folds)} fold(s))")
    logger.info("=" * 60)

    outcomes = evaluate_all(specs, folds, config)
    report = rank_results(outcomes, config.sort_metric, config.model_type)

    if report.best is not None:
        logger.info(f"Best model: {report.best.name} "
                    f"({report.sort_metric.label}={report.best.test_value(report.sort_metric):.4f})")
    else:
        logger.warning("No models were successfully evaluated")

    return report


class ModelComparison:
    """
    Stateful wrapper around ``compare``.

    Keeps the latest report so the best model can be refitted on the full
    dataset, used for prediction and saved.
    """

    def __init__(
        self,
        dataset: Dataset,
        config: ComparisonConfig = None,
        models: Optional[Sequence[ModelSpec]] = None
    ):
        self.dataset = dataset
        self.config = config or ComparisonConfig()
        self.models = list(models) if models is not None else None
        self.report: Optional[ComparisonReport] = None
        self.final_model: Optional[BaseModel] = None
        self.comparison_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    def _specs(self) -> List[ModelSpec]:
        return self.models if self.models is not None else all_models(self.config)

    def compare(self) -> ComparisonReport:
        """Run the comparison and keep its report."""
        self.report = compare(self.dataset, self.config, self._specs())
        self.final_model = None
        return self.report

    def train_final_model(self) -> BaseModel:
        """Refit the best-ranked model on the whole dataset."""
        if self.report is None:
            raise ValueError("Run compare() before training a final model")
        best = self.report.best
        if best is None:
            raise ValueError("No model completed the comparison successfully")

        spec = next(spec for spec in self._specs() if spec.name == best.name)
        logger.info(f"Training final model: {spec.name}")
        self.final_model = spec.fit(self.dataset.features, self.dataset.targets)
        return self.final_model

    def auto(self) -> BaseModel:
        """Compare all models, then train the winner on the full dataset."""
        self.compare()
        return self.train_final_model()

    def predict(self, X: Union[np.ndarray, Sequence[Sequence[float]]]) -> np.ndarray:
        """Predict with the final model; a single row may be passed as a 1-D vector."""
        if self.final_model is None:
            raise ValueError("Train a final model before predicting")
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        return self.final_model.predict(X)

    def save_final_model(self, filepath: Path = None) -> Path:
        if self.final_model is None:
            raise ValueError("Train a final model before saving it")
        return self.final_model.save_model(filepath)

    def save_report(self, filepath: Path = None, **format_kwargs) -> Path:
        """Write the rendered report to ``filepath`` (default: the reports directory)."""
        if self.report is None:
            raise ValueError("Run compare() before saving a report")

        filepath = Path(filepath) if filepath else REPORTS_DIR / f"model_comparison_{self.comparison_timestamp}.txt"
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(format_report(self.report, **format_kwargs))
        logger.info(f"Saved comparison report to: {filepath}")

        return filepath

    def plot_results(self, output_dir: Path = None) -> List[Path]:
        """
        Save the comparison and training-vs-testing charts for the sort metric.

        Args:
            output_dir: Target directory (default: a per-run folder under the plots directory)

        Returns:
            Paths of the saved plots (empty when no model succeeded)
        """
        if self.report is None:
            raise ValueError("Run compare() before plotting results")

        output_dir = Path(output_dir) if output_dir else PLOTS_DIR / f"run_{self.comparison_timestamp}"
        metric_name = self.report.sort_metric.name.lower()
        paths = [
            plot_model_comparison(self.report, save_path=output_dir / f"model_comparison_{metric_name}.png"),
            plot_train_test(self.report, save_path=output_dir / f"train_test_{metric_name}.png"),
        ]
        return [path for path in paths if path is not None]

    def __str__(self) -> str:
        if self.report is None:
            return "No comparison has been run"
        return format_report(self.report)
