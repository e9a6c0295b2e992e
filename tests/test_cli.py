"""
Tests for the command-line interface.
"""

import pytest
import pandas as pd
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from automl.cli import build_parser, main


@pytest.fixture
def csv_file(tmp_path):
    np.random.seed(42)
    n = 80
    df = pd.DataFrame({
        'a': np.random.randn(n),
        'b': np.random.randn(n),
    })
    df['target'] = 2 * df['a'] - df['b'] + np.random.randn(n) * 0.1
    path = tmp_path / "data.csv"
    df.to_csv(path, index=False)
    return path


class TestParser:
    def test_source_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_target_index(self):
        args = build_parser().parse_args(['--data', 'x.csv', '--target', '2'])
        assert args.target == 2

    def test_target_name(self):
        args = build_parser().parse_args(['--data', 'x.csv', '--target', 'price'])
        assert args.target == 'price'

    def test_shuffle_flag(self):
        parser = build_parser()
        assert parser.parse_args(['--dataset', 'diabetes']).no_shuffle is False
        assert parser.parse_args(['--dataset', 'diabetes', '--no-shuffle']).no_shuffle is True


class TestMain:
    def test_toy_regression(self, capsys):
        assert main(['--dataset', 'diabetes', '--seed', '1']) == 0
        out = capsys.readouterr().out
        assert out.startswith("┌")
        assert "Linear Regressor" in out
        assert "R^2" in out

    def test_toy_classification(self, capsys):
        assert main(['--dataset', 'iris', '--seed', '1', '--train-test']) == 0
        out = capsys.readouterr().out
        assert "Training Accuracy" in out
        assert "Gaussian Naive Bayes" in out

    def test_csv(self, csv_file, capsys):
        assert main(['--data', str(csv_file), '--target', 'target', '--seed', '0',
                     '--skip', 'svr', 'knn_regressor', '--show-time']) == 0
        out = capsys.readouterr().out
        assert "Support Vector Regressor" not in out
        assert "KNN Regressor" not in out
        assert "Time" in out

    def test_show_settings(self, capsys):
        assert main(['--dataset', 'diabetes', '--seed', '0', '--show-settings']) == 0
        assert "Settings" in capsys.readouterr().out

    def test_save_model(self, tmp_path, capsys):
        path = tmp_path / "best.joblib"
        assert main(['--dataset', 'diabetes', '--seed', '0', '--save-model', str(path)]) == 0
        assert path.exists()

    def test_no_shuffle(self, capsys):
        assert main(['--dataset', 'diabetes', '--no-shuffle', '--show-settings']) == 0
        row = next(line for line in capsys.readouterr().out.splitlines() if 'Shuffle Data' in line)
        assert 'False' in row

    def test_plot(self, tmp_path, capsys):
        plot_dir = tmp_path / 'plots'
        assert main(['--dataset', 'diabetes', '--seed', '0', '--plot', str(plot_dir)]) == 0
        assert 'Saved plot to' in capsys.readouterr().out
        assert sorted(p.name for p in plot_dir.iterdir()) == ['model_comparison_r2.png', 'train_test_r2.png']

    def test_missing_file(self, capsys):
        assert main(['--data', 'does_not_exist.csv']) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_bad_sort_metric(self, capsys):
        assert main(['--dataset', 'diabetes', '--sort-by', 'accuracy']) == 1
        assert "error:" in capsys.readouterr().err

    def test_bad_test_fraction(self, capsys):
        assert main(['--dataset', 'diabetes', '--test-fraction', '1.5']) == 1
