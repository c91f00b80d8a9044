"""Exact TSP by exhaustive backtracking.

Fixed root, depth-first extension along outgoing edges to unvisited vertices,
undo on the way back. A candidate is complete once every vertex is on the
partial tour and an edge leads back to the root. Worst case O(V!), meant for
small instances only.

The recursion is unrolled into an explicit stack of adjacency iterators so
deep instances do not hit the interpreter's recursion limit.
"""
from __future__ import annotations

import logging
import time
from typing import List, Optional

from graphtsp.graph import Graph, Vertex
from graphtsp.traversal import TraversalContext
from graphtsp.tsp.tour import TourResult

logger = logging.getLogger(__name__)

DEFAULT_ROOT = '0'


def backtracking_tsp(graph: Graph, start: str = DEFAULT_ROOT, ctx: Optional[TraversalContext] = None,
                     prune: bool = False) -> TourResult:
    """Optimal closed tour from ``start``; empty result when none exists.

    With ``prune`` a branch is abandoned as soon as its running cost reaches
    the best cost found so far. Weights are non-negative, so the returned tour
    is the same either way.
    """
    ctx = ctx if ctx is not None else TraversalContext()
    ctx.reset()
    root = graph.find_vertex(start)
    if root is None:
        logger.warning("Start node %r not found in the graph", start)
        return TourResult(method='backtracking')

    start_t = time.time()
    n = graph.num_vertices()
    best_tour: List[str] = []
    best_cost = float('inf')

    path: List[Vertex] = [root]
    costs: List[float] = [0.0]
    stack = [iter(root.adj)]
    ctx.visited.add(root.id)
    while stack:
        edge = next(stack[-1], None)
        if edge is None:
            stack.pop()
            ctx.visited.discard(path.pop().id)
            costs.pop()
            continue
        w = edge.dest
        new_cost = costs[-1] + edge.weight
        if len(path) == n:
            if w is root and new_cost < best_cost:
                best_cost = new_cost
                best_tour = [v.id for v in path] + [root.id]
            continue
        if w.id in ctx.visited:
            continue
        if prune and new_cost >= best_cost:
            continue
        ctx.visited.add(w.id)
        path.append(w)
        costs.append(new_cost)
        stack.append(iter(w.adj))

    ctx.reset()
    runtime = time.time() - start_t
    if not best_tour:
        logger.info("No Hamiltonian cycle from %r", start)
        return TourResult(method='backtracking', runtime=runtime)
    logger.debug("backtracking: cost=%.3f in %.3fs", best_cost, runtime)
    return TourResult(tour=best_tour, cost=best_cost, method='backtracking', runtime=runtime)
