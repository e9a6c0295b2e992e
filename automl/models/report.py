"""
Comparison results and report formatting.

Ranks per-model results by a chosen metric and renders them as a
box-drawn text table. Failed models never take part in the ranking; they
are listed in a trailing "Failed models" table with the reason.
"""

import io
import math
from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from rich import box
from rich.console import Console
from rich.measure import Measurement
from rich.table import Table

from automl.config.config import Algorithm, ComparisonConfig, Metric, ModelType
from automl.errors import InvalidConfiguration
from automl.models.metrics import ClassificationMetrics, RegressionMetrics
from automl.models.registry import MODEL_TABLES

Scores = Union[RegressionMetrics, ClassificationMetrics]

# Upper bound for measuring a table; rendering then uses the measured width
MAX_RENDER_WIDTH = 100_000


@dataclass(frozen=True)
class MetricResult:
    """Scores of one successfully evaluated model."""

    name: str
    algorithm: Optional[Algorithm]
    train_metrics: Scores
    test_metrics: Scores
    fit_seconds: float
    n_folds: int = 1

    def test_value(self, metric: Metric) -> float:
        return self.test_metrics.value(metric)

    def train_value(self, metric: Metric) -> float:
        return self.train_metrics.value(metric)


@dataclass(frozen=True)
class ModelFailure:
    """Marker for a model that could not be fitted or scored."""

    name: str
    algorithm: Optional[Algorithm]
    reason: str


Outcome = Union[MetricResult, ModelFailure]


@dataclass(frozen=True)
class ComparisonReport:
    """Ranked results of one comparison run (best model first)."""

    results: Tuple[MetricResult, ...]
    failures: Tuple[ModelFailure, ...]
    sort_metric: Metric
    model_type: ModelType

    @property
    def best(self) -> Optional[MetricResult]:
        return self.results[0] if self.results else None

    def to_frame(self) -> pd.DataFrame:
        """One row per ranked model with train and test scores."""
        rows = []
        for result in self.results:
            row = {'Model': result.name}
            for key, value in asdict(result.train_metrics).items():
                row[f'train_{key}'] = value
            for key, value in asdict(result.test_metrics).items():
                row[f'test_{key}'] = value
            row['fit_seconds'] = result.fit_seconds
            rows.append(row)
        return pd.DataFrame(rows)

    def format(self, **kwargs) -> str:
        return format_report(self, **kwargs)

    def __str__(self) -> str:
        return format_report(self)


def _sort_key(metric: Metric):
    def key(result: MetricResult):
        value = result.test_value(metric)
        if value is None or not np.isfinite(value):
            return (1, 0.0)
        return (0, -value if metric.higher_is_better else value)
    return key


def rank_results(
    outcomes: Iterable[Outcome],
    sort_metric: Union[Metric, str],
    model_type: ModelType = ModelType.REGRESSION
) -> ComparisonReport:
    """
    Order successful results best-first by their test ``sort_metric``.

    Higher is better for R^2, explained variance and the accuracy family,
    lower is better for MSE and MAE. Ties keep their incoming order.
    """
    sort_metric = Metric.parse(sort_metric)
    if sort_metric.model_type is not model_type:
        raise InvalidConfiguration(
            f"Sort metric {sort_metric.label} does not apply to {model_type.value.lower()} models"
        )

    outcomes = list(outcomes)
    results = [o for o in outcomes if isinstance(o, MetricResult)]
    failures = tuple(o for o in outcomes if isinstance(o, ModelFailure))

    return ComparisonReport(
        results=tuple(sorted(results, key=_sort_key(sort_metric))),
        failures=failures,
        sort_metric=sort_metric,
        model_type=model_type,
    )


def format_value(value: Optional[float]) -> str:
    """Four significant digits: fixed point for 0.01 <= |v| < 1000, scientific otherwise."""
    if value is None:
        return "-"
    if not math.isfinite(value):
        return str(value)
    if value == 0:
        return "0.000"
    magnitude = abs(value)
    if 0.01 <= magnitude < 1000:
        decimals = max(0, 3 - int(math.floor(math.log10(magnitude))))
        return f"{value:.{decimals}f}"
    return f"{value:.3e}"


def format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m {rest:.0f}s"


def _new_table(*headers: str) -> Table:
    table = Table(box=box.SQUARE_DOUBLE_HEAD, show_edge=True, header_style=None)
    for header in headers:
        table.add_column(header, no_wrap=True)
    return table


def render_table(table: Table) -> str:
    """
    Render a rich table to plain text (no colour or style codes).

    The console is sized to the table's natural width, so no cell is ever
    wrapped or cut short.
    """
    def make_console(width: int) -> Console:
        return Console(
            file=io.StringIO(),
            width=width,
            color_system=None,
            force_terminal=False,
            highlight=False,
            markup=False,
            emoji=False,
        )

    sizing = make_console(MAX_RENDER_WIDTH)
    width = Measurement.get(sizing, sizing.options, table).maximum
    console = make_console(max(width, 1))
    console.print(table)
    return console.file.getvalue()


def format_report(
    report: ComparisonReport,
    metrics: Optional[Sequence[Union[Metric, str]]] = None,
    train_test: bool = False,
    show_time: bool = False
) -> str:
    """
    Render the ranked results as a table.

    Args:
        report: Ranked comparison results
        metrics: Metric columns; defaults to every metric of the model type,
            or to the sort metric alone when ``train_test`` is set
        train_test: Show "Training <metric>" / "Testing <metric>" column pairs
        show_time: Add a "Time" column with each model's evaluation time

    Returns:
        The table text, followed by a "Failed models" table when any failed
    """
    if metrics is None:
        metrics = [report.sort_metric] if train_test else Metric.for_model_type(report.model_type)
    metrics = [Metric.parse(metric) for metric in metrics]
    for metric in metrics:
        if metric.model_type is not report.model_type:
            raise InvalidConfiguration(
                f"Metric {metric.label} does not apply to {report.model_type.value.lower()} models"
            )

    headers = ["Model"]
    if show_time:
        headers.append("Time")
    for metric in metrics:
        if train_test:
            headers.extend([f"Training {metric.label}", f"Testing {metric.label}"])
        else:
            headers.append(metric.label)

    table = _new_table(*headers)
    for result in report.results:
        row = [result.name]
        if show_time:
            row.append(format_duration(result.fit_seconds))
        for metric in metrics:
            if train_test:
                row.append(format_value(result.train_value(metric)))
            row.append(format_value(result.test_value(metric)))
        table.add_row(*row)

    text = render_table(table)

    if report.failures:
        failures = _new_table("Model", "Failure")
        for failure in report.failures:
            failures.add_row(failure.name, failure.reason)
        text += "\nFailed models\n" + render_table(failures)

    return text


def format_settings(config: ComparisonConfig) -> str:
    """Render the active configuration as a two-column table."""
    skipped = "\n".join(algorithm.value for algorithm in config.skip) or "None"

    table = _new_table("Settings", "Value")
    table.add_row("General", "")
    general: List[Tuple[str, object]] = [
        ("Model Type", config.model_type.value),
        ("Verbose", config.verbose),
        ("Sorting Metric", config.sort_metric.label),
        ("Test Fraction", config.test_fraction),
        ("Random Seed", config.random_seed),
        ("Shuffle Data", config.shuffle),
        ("Number of CV Folds", config.cv_folds),
        ("Parallel Jobs", config.n_jobs),
        ("Fit Timeout (s)", config.fit_timeout),
        ("Skipped Algorithms", skipped),
    ]
    for label, value in general:
        table.add_row(f"    {label}", str(value))

    for algorithm, _, section in MODEL_TABLES[config.model_type]:
        if algorithm in config.skip:
            continue
        table.add_row(algorithm.value, "")
        for key, value in asdict(getattr(config, section)).items():
            table.add_row(f"    {key}", str(value))

    return render_table(table)
