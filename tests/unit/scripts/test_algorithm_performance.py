"""
Tests for the benchmark helpers in `algorithm_performance`.
"""
import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from rna_nussinov_fold.scripts import algorithm_performance as perf


def test_generate_random_sequence_is_reproducible():
    first = perf.generate_random_sequence(50, seed=42)
    second = perf.generate_random_sequence(50, seed=42)

    assert first == second
    assert len(first) == 50
    assert set(first) <= set("ACGU")
    assert perf.generate_random_sequence(50, seed=43) != first


@pytest.mark.parametrize("fill_order", ["bottom_up", "memoized"])
def test_nussinov_fold_summary(fill_order):
    result = perf.nussinov_fold("GGGAAAUCCC", fill_order=fill_order)

    assert result["score"] == 3
    assert result["length"] == 10
    assert result["dot_bracket"] == "(((....)))"
    assert result["computed_cells"] > 0


def test_analyze_complexity_recovers_cubic_exponent():
    """
    Synthetic runtimes proportional to N^3 give k == 3.
    """
    lengths = [50, 100, 200, 400]
    times = [2e-7 * n ** 3 for n in lengths]

    k, fitted = perf.analyze_complexity(lengths, times)

    assert k == pytest.approx(3.0, abs=1e-6)
    assert np.allclose(fitted, times)


def test_benchmarks_and_markdown_table(capsys):
    runtime = perf.benchmark_runtime([8, 16], num_trials=2)
    memory = perf.benchmark_memory([8, 16])
    capsys.readouterr()

    assert runtime["lengths"] == [8, 16]
    assert len(runtime["mean_times"]) == len(runtime["std_times"]) == 2
    assert all(peak > 0 for peak in memory["peak_memory_mb"])

    table = perf.generate_markdown_table(runtime, memory).splitlines()
    assert table[0].startswith("| Sequence Length")
    assert len(table) == 4


def test_plot_results_saves_png(tmp_path):
    runtime = {"lengths": [10, 20], "mean_times": [0.01, 0.08], "std_times": [0.0, 0.001], "scores": [1, 3]}
    memory = {"lengths": [10, 20], "peak_memory_mb": [0.1, 0.3]}

    out_path = perf.plot_results(runtime, memory, np.array([0.01, 0.08]), 3.0, output_dir=tmp_path, show=False)

    assert out_path == tmp_path / "performance_analysis.png"
    assert out_path.exists()
