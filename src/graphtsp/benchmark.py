#!/usr/bin/env python3
"""Benchmark the tour-construction algorithms over a set of CSV datasets.

Features:
 - Toy graphs by glob (--toy-pattern; tourism files detected by name or --tourism)
 - Real-world graphs: one sub-directory per graph holding nodes.csv / edges.csv (--real-world-dir)
 - Extra fully connected graphs: edges_<N>.csv files next to a shared nodes.csv (--extra-dir)
 - Exact solver skipped above MAX_EXACT_N vertices
 - Multiple runs per (dataset, algorithm)
 - Incremental CSV saving after each dataset, summary table at the end

Configuration (environment overrides):
  GRAPHTSP_MAX_EXACT_N   largest graph handed to the backtracking solver (default 12)
  GRAPHTSP_RUNS          default number of runs per configuration (default 3)

Example:
  graphtsp-benchmark --toy-pattern 'data/toy/*.csv' --extra-dir data/extra --runs 5
"""
from __future__ import annotations

import argparse
import glob
import logging
import os
import re
import time
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from graphtsp.cli import ALGORITHMS
from graphtsp.data import DEFAULT_START, TSPData
from graphtsp.parsers.csv_loader import InputFileError

logger = logging.getLogger(__name__)

MAX_EXACT_N = 12
RUNS = 3
RESULTS_CSV = 'benchmark_results.csv'

# Apply environment overrides if provided
try:
    _env_max = os.environ.get('GRAPHTSP_MAX_EXACT_N')
    if _env_max:
        MAX_EXACT_N = int(_env_max)
    _env_runs = os.environ.get('GRAPHTSP_RUNS')
    if _env_runs:
        RUNS = int(_env_runs)
except ValueError:
    logger.warning("Ignoring non-integer GRAPHTSP_MAX_EXACT_N / GRAPHTSP_RUNS")


@dataclass
class DatasetSpec:
    name: str
    kind: str                     # 'toy' | 'real_world' | 'extra'
    edges: str
    nodes: Optional[str] = None
    tourism: bool = False
    n_nodes: int = -1


@dataclass
class RunRecord:
    dataset: str
    kind: str
    n: int
    algorithm: str
    run: int
    status: str                   # ok | incomplete | no_tour | skipped
    cost: Optional[float]
    tour_length: int
    runtime: float
    timestamp: str


def load_spec(spec: DatasetSpec) -> TSPData:
    data = TSPData()
    if spec.kind == 'toy':
        data.load_toy_graph(spec.edges, tourism=spec.tourism)
    elif spec.kind == 'real_world':
        data.load_real_world_graph(spec.nodes, spec.edges)
    elif spec.kind == 'extra':
        data.load_extra_fully_connected_graph(spec.nodes, spec.edges, spec.n_nodes)
    else:
        raise ValueError(f"Unknown dataset kind: {spec.kind}")
    return data


def discover_datasets(toy_pattern: Optional[str] = None, real_world_dir: Optional[str] = None,
                      extra_dir: Optional[str] = None, tourism: bool = False) -> List[DatasetSpec]:
    specs: List[DatasetSpec] = []
    if toy_pattern:
        for path in sorted(glob.glob(toy_pattern)):
            name = os.path.splitext(os.path.basename(path))[0]
            specs.append(DatasetSpec(name=name, kind='toy', edges=path,
                                     tourism=tourism or 'tourism' in name.lower()))
    if real_world_dir:
        for sub in sorted(glob.glob(os.path.join(real_world_dir, '*'))):
            nodes = os.path.join(sub, 'nodes.csv')
            edges = os.path.join(sub, 'edges.csv')
            if os.path.isfile(nodes) and os.path.isfile(edges):
                specs.append(DatasetSpec(name=os.path.basename(sub), kind='real_world', edges=edges, nodes=nodes))
    if extra_dir:
        nodes = os.path.join(extra_dir, 'nodes.csv')
        for path in sorted(glob.glob(os.path.join(extra_dir, 'edges_*.csv'))):
            m = re.search(r'edges_(\d+)\.csv$', path)
            if not m:
                continue
            n = int(m.group(1))
            specs.append(DatasetSpec(name=f"extra_{n}", kind='extra', edges=path, nodes=nodes, n_nodes=n))
    return specs


def run_dataset(spec: DatasetSpec, algorithms: List[str], runs: int, start: str = DEFAULT_START,
                max_exact_n: int = MAX_EXACT_N) -> List[RunRecord]:
    data = load_spec(spec)
    n = data.network.num_vertices()
    records: List[RunRecord] = []
    for algorithm in algorithms:
        for run in range(1, runs + 1):
            stamp = time.strftime('%Y-%m-%dT%H:%M:%S')
            if algorithm == 'backtracking' and n > max_exact_n:
                records.append(RunRecord(spec.name, spec.kind, n, algorithm, run, 'skipped', None, 0, 0.0, stamp))
                continue
            sol = ALGORITHMS[algorithm](data, start)
            if sol.empty:
                status, cost = 'no_tour', None
            elif sol.is_closed(n):
                status, cost = 'ok', sol.cost
            else:
                status, cost = 'incomplete', sol.cost
            records.append(RunRecord(spec.name, spec.kind, n, algorithm, run, status, cost,
                                     max(len(sol.tour) - 1, 0), sol.runtime, stamp))
    return records


def save_results(records: List[RunRecord], out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, RESULTS_CSV)
    pd.DataFrame([asdict(r) for r in records]).to_csv(path, index=False)
    return path


def summarize(records: List[RunRecord]) -> pd.DataFrame:
    df = pd.DataFrame([asdict(r) for r in records])
    if df.empty:
        return df
    ok = df[df['status'] == 'ok']
    summary = df.groupby(['dataset', 'algorithm']).agg(runs=('run', 'count'), runtime_mean=('runtime', 'mean'))
    costs = ok.groupby(['dataset', 'algorithm']).agg(cost_best=('cost', 'min'), successes=('run', 'count'))
    summary = summary.join(costs).reset_index()
    summary['successes'] = summary['successes'].fillna(0).astype(int)
    return summary


def run_benchmark(specs: List[DatasetSpec], algorithms: List[str], runs: int = RUNS,
                  out_dir: str = 'results', start: str = DEFAULT_START,
                  max_exact_n: int = MAX_EXACT_N) -> List[RunRecord]:
    print(f"Running benchmark on {len(specs)} datasets")
    print(f"Algorithms: {algorithms}")
    print(f"Runs per configuration: {runs}")
    records: List[RunRecord] = []
    for spec in specs:
        print(f"\nDataset {spec.name} ({spec.kind})")
        try:
            new_records = run_dataset(spec, algorithms, runs, start, max_exact_n)
        except InputFileError as e:
            print(f"  [error] {e}")
            continue
        for algorithm in algorithms:
            rows = [r for r in new_records if r.algorithm == algorithm]
            costs = [r.cost for r in rows if r.status == 'ok']
            times = [r.runtime for r in rows]
            cost_str = f"{min(costs):.2f}" if costs else rows[0].status if rows else '-'
            print(f"  {algorithm:14s} cost={cost_str:>14s} time={np.mean(times) if times else 0.0:8.4f}s")
        records.extend(new_records)
        save_results(records, out_dir)
        print(f"  ✓ Saving results after {spec.name}")
    if records:
        print(f"\n✓ Final results written to {os.path.join(out_dir, RESULTS_CSV)}")
    return records


def main(argv=None) -> int:  # pragma: no cover - CLI
    parser = argparse.ArgumentParser(description="Benchmark TSP tour-construction algorithms over CSV datasets")
    parser.add_argument('--toy-pattern', help='Glob for toy graph CSV files')
    parser.add_argument('--tourism', action='store_true', help='Treat every toy file as a tourism file')
    parser.add_argument('--real-world-dir', help='Directory with one sub-directory per real-world graph')
    parser.add_argument('--extra-dir', help='Directory with nodes.csv and edges_<N>.csv files')
    parser.add_argument('--algorithms', default=','.join(sorted(ALGORITHMS)),
                        help='Comma-separated algorithms')
    parser.add_argument('--runs', type=int, default=RUNS, help='Number of runs per configuration')
    parser.add_argument('--start', default=DEFAULT_START)
    parser.add_argument('--max-exact-n', type=int, default=MAX_EXACT_N,
                        help='Skip backtracking on graphs with more vertices')
    parser.add_argument('--out-dir', default='results', help='Output directory')
    parser.add_argument('--verbose', '-v', action='store_true')
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='[%(levelname)s] %(name)s: %(message)s')

    algorithms = [a.strip() for a in args.algorithms.split(',') if a.strip()]
    unknown = [a for a in algorithms if a not in ALGORITHMS]
    if unknown:
        parser.error(f"unknown algorithms: {unknown}")

    specs = discover_datasets(args.toy_pattern, args.real_world_dir, args.extra_dir, args.tourism)
    if not specs:
        print("No datasets found")
        return 1

    records = run_benchmark(specs, algorithms, args.runs, args.out_dir, args.start, args.max_exact_n)
    summary = summarize(records)
    if not summary.empty:
        print("\nSummary:")
        print(summary.to_string(index=False))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
