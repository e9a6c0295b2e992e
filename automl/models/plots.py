"""
Comparison Plots.

Bar charts of a finished ``ComparisonReport``. Rendering uses the
non-interactive Agg backend, so plots can be produced on headless machines.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from automl.config.config import PLOTS_DIR, Metric
from automl.models.report import ComparisonReport, format_value
from automl.utils.logger import get_logger

logger = get_logger(__name__)

sns.set_theme(style="whitegrid")
FIGURE_DPI = 150


def _save_figure(fig: plt.Figure, name: str, save_path: Optional[Path]) -> Path:
    """Save figure to ``save_path`` or a timestamped file in the plots directory."""
    if save_path is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        save_path = PLOTS_DIR / f"{name}_{timestamp}.png"

    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(save_path, dpi=FIGURE_DPI, bbox_inches='tight',
                facecolor='white', edgecolor='none')
    plt.close(fig)
    logger.info(f"Saved plot: {save_path}")
    return save_path


def _metric_frame(report: ComparisonReport, metric: Metric) -> pd.DataFrame:
    return pd.DataFrame({
        'Model': [result.name for result in report.results],
        'Training': [result.train_value(metric) for result in report.results],
        'Testing': [result.test_value(metric) for result in report.results],
    })


def plot_model_comparison(
    report: ComparisonReport,
    metric: Union[Metric, str] = None,
    save_path: Path = None
) -> Optional[Path]:
    """
    Plot a bar chart of every ranked model's test score, in ranking order.

    Args:
        report: Finished comparison
        metric: Metric to plot (defaults to the report's sort metric)
        save_path: Output file; defaults to the plots directory

    Returns:
        Path to the saved plot, or None when no model succeeded
    """
    metric = Metric.parse(metric) if metric is not None else report.sort_metric
    if not report.results:
        logger.warning(f"Cannot plot comparison - no results for {metric.label}")
        return None

    logger.info(f"Generating model comparison plot for {metric.label}...")
    df = _metric_frame(report, metric)

    fig, ax = plt.subplots(figsize=(12, 6))
    sns.barplot(data=df, x='Model', y='Testing', hue='Model', palette='viridis',
                legend=False, edgecolor='white', linewidth=2, ax=ax)

    for patch, value in zip(ax.patches, df['Testing']):
        ax.text(patch.get_x() + patch.get_width() / 2., patch.get_height(),
                format_value(value), ha='center', va='bottom', fontsize=10, fontweight='bold')

    ax.set_xlabel('Model', fontsize=12)
    ax.set_ylabel(metric.label, fontsize=12)
    ax.set_title(f'Model Comparison: {metric.label}', fontsize=14, fontweight='bold')
    plt.setp(ax.get_xticklabels(), rotation=45, ha='right')

    plt.tight_layout()
    return _save_figure(fig, f'model_comparison_{metric.name.lower()}', save_path)


def plot_train_test(
    report: ComparisonReport,
    metric: Union[Metric, str] = None,
    save_path: Path = None
) -> Optional[Path]:
    """Grouped bars of training vs testing scores; a wide gap points at overfitting."""
    metric = Metric.parse(metric) if metric is not None else report.sort_metric
    if not report.results:
        logger.warning(f"Cannot plot train/test scores - no results for {metric.label}")
        return None

    logger.info(f"Generating train/test plot for {metric.label}...")
    df = _metric_frame(report, metric)

    fig, ax = plt.subplots(figsize=(12, 6))
    x = np.arange(len(df))
    width = 0.35

    ax.bar(x - width / 2, df['Training'], width, label=f'Training {metric.label}',
           color='steelblue', alpha=0.8)
    ax.bar(x + width / 2, df['Testing'], width, label=f'Testing {metric.label}',
           color='coral', alpha=0.8)

    ax.set_xlabel('Model', fontsize=12)
    ax.set_ylabel(metric.label, fontsize=12)
    ax.set_title('Training vs Testing Performance', fontsize=14, fontweight='bold')
    ax.set_xticks(x)
    ax.set_xticklabels(df['Model'], rotation=45, ha='right')
    ax.legend(fontsize=10)

    plt.tight_layout()
    return _save_figure(fig, f'train_test_{metric.name.lower()}', save_path)
