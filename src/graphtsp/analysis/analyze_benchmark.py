#!/usr/bin/env python3
"""
TSP Benchmark Analysis

Reads the benchmark_results.csv written by graphtsp.benchmark and produces:
- Algorithm summaries (cost gap to the best tour per dataset, runtime)
- Friedman test across algorithms on the datasets every algorithm solved
- An optional runtime vs. gap scatter plot
"""

import argparse
import os
from typing import Optional, Tuple

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from scipy.stats import friedmanchisquare


def load_results(path: str) -> pd.DataFrame:
    df = pd.read_csv(path)
    df['cost'] = pd.to_numeric(df['cost'], errors='coerce')
    return df


def add_gaps(df: pd.DataFrame) -> pd.DataFrame:
    """Gap of each successful run to the best successful cost on the same dataset."""
    ok = df[df['status'] == 'ok'].copy()
    best = ok.groupby('dataset')['cost'].transform('min')
    ok['gap'] = np.where(best > 0, (ok['cost'] - best) / best, 0.0)
    return ok


def calculate_summary_stats(df: pd.DataFrame) -> pd.DataFrame:
    """Per-algorithm statistics; success counts include failed and skipped runs in the denominator."""
    ok = add_gaps(df)
    summary = ok.groupby('algorithm').agg({
        'gap': ['mean', 'std', 'median'],
        'runtime': ['mean', 'std', 'median'],
    }).round(6)
    summary.columns = ['_'.join(col).strip() for col in summary.columns.values]
    summary = summary.rename(columns={
        'gap_mean': 'mean_gap',
        'gap_std': 'std_gap',
        'gap_median': 'median_gap',
        'runtime_mean': 'mean_time',
        'runtime_std': 'std_time',
        'runtime_median': 'median_time',
    })
    counts = df.groupby('algorithm').agg(runs=('run', 'count'))
    counts['successes'] = ok.groupby('algorithm')['run'].count()
    summary = counts.join(summary).reset_index()
    summary['successes'] = summary['successes'].fillna(0).astype(int)
    summary['std_gap'] = summary['std_gap'].fillna(0)
    summary['std_time'] = summary['std_time'].fillna(0)
    return summary.sort_values('mean_gap', na_position='last')


def friedman_test(df: pd.DataFrame) -> Optional[Tuple[float, float]]:
    """(statistic, p-value) over datasets solved by every algorithm, or None if too few."""
    ok = df[df['status'] == 'ok']
    table = ok.pivot_table(index='dataset', columns='algorithm', values='cost', aggfunc='min').dropna()
    if table.shape[1] < 3 or table.shape[0] < 2:
        return None
    stat, p = friedmanchisquare(*[table[c].values for c in table.columns])
    return float(stat), float(p)


def plot_runtime_vs_gap(df: pd.DataFrame, output_file: str) -> None:
    ok = add_gaps(df)
    fig, ax = plt.subplots(figsize=(10, 6))
    for algorithm, group in ok.groupby('algorithm'):
        ax.scatter(group['runtime'], group['gap'] * 100, label=algorithm, alpha=0.7)
    ax.set_xscale('symlog', linthresh=1e-4)
    ax.set_xlabel('Runtime (s)')
    ax.set_ylabel('Gap to best tour (%)')
    ax.set_title('TSP algorithms: runtime vs. tour quality')
    ax.grid(True, linestyle=':', alpha=0.6)
    ax.legend()
    fig.tight_layout()
    fig.savefig(output_file)
    plt.close(fig)


def generate_summaries(results_file: str, output_dir: str, plot: bool = False) -> pd.DataFrame:
    print(f"Loading benchmark data from {results_file}")
    df = load_results(results_file)
    os.makedirs(output_dir, exist_ok=True)

    summary = calculate_summary_stats(df)
    summary_file = os.path.join(output_dir, "tsp_algorithm_summary.csv")
    summary.to_csv(summary_file, index=False)
    print(f"  ✓ Written to {summary_file}")

    print("\n" + "=" * 60)
    print("TSP BENCHMARK SUMMARY STATISTICS")
    print("=" * 60)
    print(summary[['algorithm', 'mean_gap', 'mean_time', 'successes', 'runs']].to_string(index=False))

    result = friedman_test(df)
    if result is None:
        print("\nFriedman test skipped (needs >= 3 algorithms and >= 2 datasets solved by all)")
    else:
        stat, p = result
        print(f"\nFriedman chi-square={stat:.4f} p={p:.4g}")

    if plot:
        plot_file = os.path.join(output_dir, "runtime_vs_gap.png")
        plot_runtime_vs_gap(df, plot_file)
        print(f"  ✓ Plot written to {plot_file}")
    return summary


def main():
    parser = argparse.ArgumentParser(description="Analyze TSP benchmark results")
    parser.add_argument('--results-file', default='results/benchmark_results.csv',
                        help='CSV written by graphtsp-benchmark')
    parser.add_argument('--output-dir', default='results/analysis',
                        help='Output directory for summary files')
    parser.add_argument('--plot', action='store_true', help='Also save a runtime vs. gap plot')
    args = parser.parse_args()

    if not os.path.exists(args.results_file):
        print(f"Error: Results file {args.results_file} not found")
        return

    generate_summaries(args.results_file, args.output_dir, args.plot)


if __name__ == "__main__":
    main()
