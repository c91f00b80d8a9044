"""Greedy nearest-neighbour tours.

``cluster_approximation_tsp`` walks to the closest unvisited neighbour over
direct edges until every vertex is on the tour or the walk gets stuck (an
incomplete tour means the start's region is disconnected from the rest).

``mst_approximation_tsp`` runs Prim recording parents and takes the preorder
of the resulting tree, following only edges whose destination has the current
vertex as its parent.
"""
from __future__ import annotations

import logging
import time
from typing import List, Optional, Tuple

from graphtsp.graph import Graph, Vertex
from graphtsp.traversal import TraversalContext
from graphtsp.tsp.mst_approximation import prim
from graphtsp.tsp.tour import TourResult, tour_cost

logger = logging.getLogger(__name__)


def find_nearest_neighbor(v: Vertex, ctx: TraversalContext) -> Tuple[Optional[Vertex], float]:
    nearest = None
    min_distance = float('inf')
    for edge in v.adj:
        w = edge.dest
        if w.id not in ctx.visited and edge.weight < min_distance:
            min_distance = edge.weight
            nearest = w
    return nearest, min_distance


def cluster_approximation_tsp(graph: Graph, start: str = '0', ctx: Optional[TraversalContext] = None) -> TourResult:
    ctx = ctx if ctx is not None else TraversalContext()
    ctx.reset()
    start_vertex = graph.find_vertex(start)
    if start_vertex is None:
        logger.warning("Start node %r not found in the graph", start)
        return TourResult(method='cluster')

    start_t = time.time()
    n = graph.num_vertices()
    tour: List[str] = [start]
    cost = 0.0
    ctx.visited.add(start)
    current = start_vertex
    while len(tour) < n:
        nearest, distance = find_nearest_neighbor(current, ctx)
        if nearest is None:
            logger.info("Nearest-neighbour walk stuck at %r after %d of %d vertices", current.id, len(tour), n)
            break
        ctx.visited.add(nearest.id)
        tour.append(nearest.id)
        cost += distance
        current = nearest

    closing = graph.edge_weight(current.id, start)
    if closing is not None:
        cost += closing
    tour.append(start)
    ctx.reset()
    return TourResult(tour=tour, cost=cost, method='cluster', runtime=time.time() - start_t)


def preorder_traversal_mst(root: Vertex, ctx: TraversalContext) -> List[str]:
    order: List[str] = []
    seen = {root.id}
    stack = [root]
    while stack:
        u = stack.pop()
        order.append(u.id)
        children = [e.dest for e in u.adj
                    if ctx.parent.get(e.dest.id) == u.id and e.dest.id not in seen]
        for child in children:
            seen.add(child.id)
        # reversed so the first child in adjacency order is expanded first
        stack.extend(reversed(children))
    return order


def mst_approximation_tsp(graph: Graph, start: str = '0', ctx: Optional[TraversalContext] = None) -> TourResult:
    start_vertex = graph.find_vertex(start)
    if start_vertex is None:
        logger.warning("Start node %r not found in the graph", start)
        return TourResult(method='mst')
    start_t = time.time()
    ctx = prim(graph, start, ctx, record_parent=True)
    tour = preorder_traversal_mst(start_vertex, ctx)
    ctx.reset()
    if len(tour) < graph.num_vertices():
        logger.info("MST from %r spans %d of %d vertices", start, len(tour), graph.num_vertices())
    tour.append(start)
    cost = tour_cost(graph, tour)
    runtime = time.time() - start_t
    if cost is None:
        logger.warning("MST preorder tour cannot be priced: a leg has no edge and no coordinates")
        return TourResult(method='mst', runtime=runtime)
    return TourResult(tour=tour, cost=cost, method='mst', runtime=runtime)
