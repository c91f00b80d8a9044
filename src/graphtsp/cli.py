#!/usr/bin/env python3
"""Run TSP tour-construction algorithms on a CSV dataset.

Dataset kinds:
 - toy graph: a single edges CSV (--toy), optionally the tourism variant with
   label columns (--tourism)
 - real-world / extra fully connected graph: --nodes plus --edges
   (--real-world when both files carry a header line, --n-nodes to read only
   the first N nodes of an extra fully connected graph)

Algorithms (--algorithm, default all):
    backtracking   exact search, small graphs only
    triangular     MST (Prim) + DFS preorder 2-approximation
    cluster        greedy nearest neighbour
    mst            Prim parents + preorder
    real_world     star-subgraph decomposition for disconnected graphs

CLI examples:
    graphtsp --toy data/shipping.csv --algorithm backtracking
    graphtsp --toy data/tourism.csv --tourism --algorithm all
    graphtsp --nodes data/graph1/nodes.csv --edges data/graph1/edges.csv --real-world --algorithm triangular
    graphtsp --nodes data/nodes.csv --edges data/edges_25.csv --n-nodes 25 --json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, Dict, List

from graphtsp.data import DEFAULT_START, TSPData
from graphtsp.parsers.csv_loader import InputFileError
from graphtsp.tsp.tour import TourResult

ALGORITHMS: Dict[str, Callable[[TSPData, str], TourResult]] = {
    'backtracking': lambda data, start: data.backtracking_tsp(start),
    'triangular': lambda data, start: data.triangular_heuristic_approximation(start),
    'cluster': lambda data, start: data.cluster_approximation_tsp(start),
    'mst': lambda data, start: data.mst_approximation_tsp(start),
    'real_world': lambda data, start: data.tsp_real_world(start),
}


def load_dataset(args: argparse.Namespace) -> TSPData:
    data = TSPData()
    if args.toy:
        data.load_toy_graph(args.toy, tourism=args.tourism)
    elif args.real_world:
        data.load_real_world_graph(args.nodes, args.edges)
    else:
        data.load_extra_fully_connected_graph(args.nodes, args.edges, args.n_nodes)
    return data


def format_tour(data: TSPData, tour: List[str]) -> str:
    if data.is_tourism():
        return ' -> '.join(f"{v} ({data.label(v)})" for v in tour)
    return ' -> '.join(tour)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="TSP tours over CSV graphs (exact, MST approximation, greedy, decomposition)")
    ap.add_argument('--toy', help='Toy graph edges CSV (origin,destination,distance[,labels])')
    ap.add_argument('--tourism', action='store_true', help='Toy CSV carries label_origin,label_destination columns')
    ap.add_argument('--nodes', help='Nodes CSV (id,longitude,latitude)')
    ap.add_argument('--edges', help='Edges CSV (source,destination,weight)')
    ap.add_argument('--real-world', action='store_true', help='Edges CSV has a header line (real-world graphs)')
    ap.add_argument('--n-nodes', type=int, default=-1, help='Read only the first N nodes (extra fully connected graphs)')
    ap.add_argument('--algorithm', choices=sorted(ALGORITHMS) + ['all'], default='all')
    ap.add_argument('--start', default=DEFAULT_START, help='Start vertex id')
    ap.add_argument('--show-tour', action='store_true', help='Print the vertex sequence of each tour')
    ap.add_argument('--json', action='store_true', help='Emit JSON array of results to stdout instead of plain text lines')
    ap.add_argument('--verbose', '-v', action='store_true')
    return ap


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='[%(levelname)s] %(name)s: %(message)s')
    if not args.toy and not (args.nodes and args.edges):
        ap.error('provide --toy FILE or both --nodes and --edges')

    try:
        data = load_dataset(args)
    except InputFileError as e:
        print(f"[error] {e}")
        return 1
    if not args.json:
        print(f"[info] Loaded {data.network.num_vertices()} vertices, {data.network.num_edges()} edges")

    names = sorted(ALGORITHMS) if args.algorithm == 'all' else [args.algorithm]
    results: List[TourResult] = []
    for name in names:
        sol = ALGORITHMS[name](data, args.start)
        results.append(sol)
        if args.json:
            continue
        if sol.empty:
            print(f"{name:14s} NO_TOUR      time={sol.runtime:6.3f}s")
            continue
        status = '' if sol.is_closed(data.network.num_vertices()) else ' (incomplete)'
        print(f"{name:14s} cost={sol.cost:14.2f} time={sol.runtime:6.3f}s legs={len(sol.tour) - 1}{status}")
        if args.show_tour:
            print(f"  {format_tour(data, sol.tour)}")

    if args.json:
        out_list = [
            {
                'method': r.method,
                'cost': r.cost,
                'runtime': r.runtime,
                'tour': r.tour,
            }
            for r in results
        ]
        print(json.dumps(out_list))
    return 0


if __name__ == '__main__':
    sys.exit(main())
