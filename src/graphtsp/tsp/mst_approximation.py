"""MST-based 2-approximation ("triangular heuristic").

Steps:
  1. Prim's algorithm with the mutable priority queue; each vertex records the
     edge that reached it (``ctx.path``).
  2. The recorded edges are materialised as an independent, undirected MST
     graph.
  3. DFS preorder of the MST graph from the start vertex, closed by returning
     to the start and priced with the tour-cost rule (haversine fallback for
     legs the original graph does not connect directly).

Under the triangle inequality the tour costs at most twice the optimum.
"""
from __future__ import annotations

import logging
import time
from typing import List, Optional

from graphtsp.graph import Edge, Graph
from graphtsp.mutable_priority_queue import MutablePriorityQueue
from graphtsp.traversal import INF, TraversalContext, dfs
from graphtsp.tsp.tour import TourResult, tour_cost

logger = logging.getLogger(__name__)


def prim(graph: Graph, start: Optional[str] = None, ctx: Optional[TraversalContext] = None,
         record_parent: bool = False) -> TraversalContext:
    """Run Prim from ``start`` (default: first vertex) and return the filled context.

    ``ctx.path`` maps every reached vertex to the edge that attached it
    (None for the root). With ``record_parent`` the parent id is kept in
    ``ctx.parent`` as well.
    """
    ctx = ctx if ctx is not None else TraversalContext()
    ctx.reset()
    vertices = graph.vertices()
    if not vertices:
        return ctx
    for v in vertices:
        ctx.dist[v.id] = INF
        ctx.path[v.id] = None
    s = graph.find_vertex(start) if start is not None else vertices[0]
    if s is None:
        raise KeyError(start)
    ctx.dist[s.id] = 0.0
    if record_parent:
        ctx.parent[s.id] = None
    q = MutablePriorityQueue(key=ctx.distance)
    q.insert(s)
    while not q.empty():
        v = q.extract_min()
        ctx.visited.add(v.id)
        for e in v.adj:
            w = e.dest
            if w.id in ctx.visited:
                continue
            old_dist = ctx.dist[w.id]
            if e.weight < old_dist:
                ctx.dist[w.id] = e.weight
                ctx.path[w.id] = e
                if record_parent:
                    ctx.parent[w.id] = v.id
                if old_dist == INF:
                    q.insert(w)
                else:
                    q.decrease_key(w)
    return ctx


def mst_edges(ctx: TraversalContext) -> List[Edge]:
    return [e for e in ctx.path.values() if e is not None]


def create_mst_graph(graph: Graph, ctx: TraversalContext) -> Graph:
    """Build the MST recorded in ``ctx`` as a new graph with bidirectional edges."""
    mst = Graph()
    for v in graph.vertices():
        mst.add_vertex(v.id, v.longitude, v.latitude, v.has_coord)
        ep = ctx.path.get(v.id)
        if ep is None:
            continue
        if not mst.add_bidirectional_edge(ep.orig.id, ep.dest.id, ep.weight):
            # the origin may come later in vertex order
            for u in (ep.orig, ep.dest):
                mst.add_vertex(u.id, u.longitude, u.latitude, u.has_coord)
            mst.add_bidirectional_edge(ep.orig.id, ep.dest.id, ep.weight)
    return mst


def _linearize(mst: Graph, start: str) -> List[str]:
    order = list(dfs(mst, start))
    seen = set(order)
    # disconnected inputs yield a spanning forest; append the other trees
    for vid in dfs(mst):
        if vid not in seen:
            seen.add(vid)
            order.append(vid)
    return order


def triangular_heuristic_approximation(graph: Graph, start: str = '0',
                                       ctx: Optional[TraversalContext] = None) -> TourResult:
    if graph.find_vertex(start) is None:
        logger.warning("Start node %r not found in the graph", start)
        return TourResult(method='triangular')
    start_t = time.time()
    ctx = prim(graph, start, ctx)
    mst = create_mst_graph(graph, ctx)
    ctx.reset()
    tour = _linearize(mst, start)
    tour.append(start)
    cost = tour_cost(graph, tour)
    runtime = time.time() - start_t
    if cost is None:
        logger.warning("Tour through the MST cannot be priced: a leg has no edge and no coordinates")
        return TourResult(method='triangular', runtime=runtime)
    logger.debug("triangular: %d legs, cost=%.3f", len(tour) - 1, cost)
    return TourResult(tour=tour, cost=cost, method='triangular', runtime=runtime)
