#!/usr/bin/env python3
"""
Performance evaluation script for the Nussinov folding algorithm.

This script benchmarks the runtime and memory usage of the $O(N^{3})$
Nussinov dynamic programming fill, for both the bottom-up and memoized fill
orders, across a range of sequence lengths. It estimates the empirical time
complexity and plots the results.
"""

import argparse
import time
import tracemalloc
import random
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path

from rna_nussinov_fold.folding import (
    NussinovFoldingConfig,
    NussinovFoldingEngine,
    make_fold_state,
    traceback_nussinov,
)

THEORETICAL_EXPONENT = 3.0


def generate_random_sequence(length: int, seed: Optional[int] = None) -> str:
    """
    Generate a random RNA sequence of a given length.

    Parameters
    ----------
    length : int
        The desired length of the RNA sequence ($N$).
    seed : int, optional
        Seed for a private random number generator, for reproducibility.

    Returns
    -------
    str
        A random RNA sequence composed of 'A', 'C', 'G', 'U' bases.
    """
    rng = random.Random(seed)
    return ''.join(rng.choices(['A', 'C', 'G', 'U'], k=length))


def nussinov_fold(sequence: str, fill_order: str = "bottom_up") -> dict:
    """
    Fold an RNA sequence with the Nussinov engine and trace the structure.

    Returns
    -------
    dict
        'score' (pair count), 'length', 'dot_bracket' and 'computed_cells'.
    """
    config = NussinovFoldingConfig(fill_order=fill_order, verbose=False)
    state = make_fold_state(len(sequence), min_loop_length=config.min_loop_length)
    NussinovFoldingEngine(config=config).fill_matrix(sequence, state)
    trace = traceback_nussinov(sequence, state)

    return {
        'score': trace.score,
        'length': len(sequence),
        'dot_bracket': trace.dot_bracket,
        'computed_cells': state.computed_cells(),
    }


def benchmark_runtime(sequence_lengths: list[int], num_trials: int = 3, fill_order: str = "bottom_up") -> dict:
    """
    Benchmark the mean runtime across different sequence lengths ($N$).

    Returns
    -------
    dict
        'lengths', 'mean_times', 'std_times' and 'scores' (pair count of the
        last trial at each length).
    """
    results = {
        'lengths': sequence_lengths,
        'mean_times': [],
        'std_times': [],
        'scores': []
    }

    for n in sequence_lengths:
        print(f"\nBenchmarking N={n} ({fill_order})...")
        trial_times = []

        for trial in range(num_trials):
            seq = generate_random_sequence(n, seed=42 + trial)

            start = time.perf_counter()
            result = nussinov_fold(seq, fill_order=fill_order)
            elapsed = time.perf_counter() - start

            trial_times.append(elapsed)
            print(f"  Trial {trial + 1}/{num_trials}: {elapsed:.3f}s")

        results['mean_times'].append(float(np.mean(trial_times)))
        results['std_times'].append(float(np.std(trial_times)))
        results['scores'].append(result['score'])

        print(f"  Mean: {results['mean_times'][-1]:.3f}s ± {results['std_times'][-1]:.3f}s")
        print(f"  Pairs: {results['scores'][-1]}")

    return results


def benchmark_memory(sequence_lengths: list[int], fill_order: str = "bottom_up") -> dict:
    """
    Benchmark peak memory usage across different sequence lengths ($N$).

    Uses `tracemalloc` to measure the peak memory allocated during folding.
    """
    results = {
        'lengths': sequence_lengths,
        'peak_memory_mb': []
    }

    for n in sequence_lengths:
        print(f"\nMeasuring memory for N={n}...")
        seq = generate_random_sequence(n, seed=42)

        tracemalloc.start()
        result = nussinov_fold(seq, fill_order=fill_order)
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        peak_mb = peak / 1024 ** 2
        results['peak_memory_mb'].append(peak_mb)

        print(f"  Peak memory: {peak_mb:.2f} MB")
        print(f"  Computed cells: {result['computed_cells']:,}")

    return results


def analyze_complexity(lengths: list[int], times: list[float]) -> tuple[float, np.ndarray]:
    """
    Fit runtimes to $T \\propto N^{k}$ and estimate the exponent $k$.

    A linear regression is performed on the log-log data:
    $\\log(T) = k \\cdot \\log(N) + c$

    Parameters
    ----------
    lengths : list of int
        Sequence lengths ($N$).
    times : list of float
        Mean runtimes ($T$) corresponding to each length.

    Returns
    -------
    tuple of (float, numpy.ndarray)
        The estimated exponent $k$ and an array of fitted times.
    """
    log_n = np.log(lengths)
    log_time = np.log(times)

    coeffs = np.polyfit(log_n, log_time, 1)
    k = float(coeffs[0])
    c = float(coeffs[1])

    fitted_times = np.exp(c) * np.array(lengths, dtype=float) ** k

    print(f"\n{'=' * 60}")
    print("COMPLEXITY ANALYSIS")
    print(f"{'=' * 60}")
    print(f"Empirical complexity: O(N^{k:.2f})")
    print(f"Theoretical:          O(N^{THEORETICAL_EXPONENT:.0f})")
    print(f"{'=' * 60}\n")

    return k, fitted_times


def plot_results(runtime_results: dict, memory_results: dict, fitted_times: np.ndarray, complexity_k: float,
                 output_dir: Path = Path('performance_results'), show: bool = True) -> Path:
    """
    Create and save runtime and memory plots.

    Returns
    -------
    Path
        Location of the saved PNG.
    """
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    ax1 = axes[0]
    lengths = runtime_results['lengths']
    ax1.errorbar(lengths, runtime_results['mean_times'], yerr=runtime_results['std_times'], fmt='o-', capsize=5,
                 label='Measured', linewidth=2, markersize=8)
    ax1.plot(lengths, fitted_times, '--',
             label=f'Fitted $O(N^{{{complexity_k:.2f}}})$', linewidth=2, alpha=0.7)
    ax1.set_xlabel('Sequence Length ($N$)', fontsize=12)
    ax1.set_ylabel('Runtime (seconds)', fontsize=12)
    ax1.set_title('Runtime Performance (Log-Log)', fontsize=14, fontweight='bold')
    ax1.legend(fontsize=10)
    ax1.grid(True, alpha=0.3)
    ax1.set_yscale('log')
    ax1.set_xscale('log')

    ax2 = axes[1]
    ax2.plot(lengths, memory_results['peak_memory_mb'], 's-', linewidth=2, markersize=8, color='orange')
    ax2.set_xlabel('Sequence Length ($N$)', fontsize=12)
    ax2.set_ylabel('Peak Memory (MB)', fontsize=12)
    ax2.set_title('Memory Usage (Log-Log)', fontsize=14, fontweight='bold')
    ax2.grid(True, alpha=0.3)
    ax2.set_yscale('log')
    ax2.set_xscale('log')

    plt.tight_layout()

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / 'performance_analysis.png'
    fig.savefig(out_path, dpi=300, bbox_inches='tight')
    print(f"\nPlot saved to: {out_path}")

    if show:
        plt.show()
    plt.close(fig)
    return out_path


def generate_markdown_table(runtime_results: dict, memory_results: dict) -> str:
    """
    Render the benchmark results as a Markdown table.
    """
    lines = [
        "| Sequence Length ($N$) | Runtime (s) | Peak Memory (MB) | Base Pairs |",
        "|-----------------------|-------------|------------------|------------|",
    ]
    for i, n in enumerate(runtime_results['lengths']):
        time_mean = runtime_results['mean_times'][i]
        time_std = runtime_results['std_times'][i]
        memory = memory_results['peak_memory_mb'][i]
        score = runtime_results['scores'][i]
        lines.append(f"| {n:21d} | {time_mean:.3f} ± {time_std:.3f} | {memory:16.2f} | {score:10d} |")

    return "\n".join(lines)


def main(argv=None):
    """
    Runs the runtime and memory benchmarks, fits the complexity exponent,
    plots the results and prints a Markdown table.
    """
    parser = argparse.ArgumentParser(description="Benchmark the Nussinov folding engine.")
    parser.add_argument("--lengths", type=int, nargs="+", default=[50, 100, 150, 200, 250, 300])
    parser.add_argument("--trials", type=int, default=3)
    parser.add_argument("--fill-order", choices=["bottom_up", "memoized"], default="bottom_up")
    parser.add_argument("--no-show", action="store_true", help="Save the plot without opening a window.")
    args = parser.parse_args(argv)

    print("=" * 60)
    print("RNA NUSSINOV FOLDING - PERFORMANCE EVALUATION")
    print("=" * 60)
    print(f"\nSequence lengths to test: {args.lengths}")
    print(f"Trials per length: {args.trials}")

    runtime_results = benchmark_runtime(args.lengths, args.trials, fill_order=args.fill_order)
    memory_results = benchmark_memory(args.lengths, fill_order=args.fill_order)

    complexity_k, fitted_times = analyze_complexity(runtime_results['lengths'], runtime_results['mean_times'])
    plot_results(runtime_results, memory_results, fitted_times, complexity_k, show=not args.no_show)

    print("\n" + "=" * 60)
    print("MARKDOWN TABLE FOR README")
    print("=" * 60 + "\n")
    print(generate_markdown_table(runtime_results, memory_results))


if __name__ == "__main__":
    main()
