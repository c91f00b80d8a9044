"""Decomposition TSP for real-world graphs that may not be fully connected.

One star subgraph per vertex (the vertex, its direct outgoing edges and their
destinations), a greedy nearest-unvisited tour inside each star, then a merge
that splices every partial tour into the growing tour right before the first
occurrence of the partial tour's start. Inside a star only the centre has
outgoing edges, so each partial tour is ``[centre, nearest, centre]``.

The merged tour is accepted only when it is a Hamiltonian cycle through the
requested start; otherwise the empty result reports that the decomposition
could not be reconciled.
"""
from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence

from graphtsp.graph import Graph, Vertex
from graphtsp.traversal import TraversalContext
from graphtsp.tsp.tour import TourResult, is_closed_tour, tour_cost

logger = logging.getLogger(__name__)


def star_subgraph(vertex: Vertex) -> Graph:
    sub = Graph()
    sub.add_vertex(vertex.id, vertex.longitude, vertex.latitude, vertex.has_coord)
    for edge in vertex.adj:
        d = edge.dest
        sub.add_vertex(d.id, d.longitude, d.latitude, d.has_coord)
        sub.add_edge(vertex.id, d.id, edge.weight)
    return sub


def tsp_subgraph(subgraph: Graph, start: str, ctx: Optional[TraversalContext] = None) -> List[str]:
    """Greedy walk inside ``subgraph`` from ``start``, closed back at ``start``."""
    ctx = ctx if ctx is not None else TraversalContext()
    ctx.reset()
    tour = [start]
    ctx.visited.add(start)
    unvisited = subgraph.num_vertices() - 1
    current = subgraph.find_vertex(start)
    while unvisited and current is not None:
        next_node = None
        min_weight = float('inf')
        for edge in current.adj:
            dest_id = edge.dest.id
            if dest_id not in ctx.visited and edge.weight < min_weight:
                min_weight = edge.weight
                next_node = edge.dest
        if next_node is None:
            break
        tour.append(next_node.id)
        ctx.visited.add(next_node.id)
        unvisited -= 1
        current = next_node
    tour.append(start)
    ctx.reset()
    return tour


def merge_tours(tours: Sequence[Sequence[str]]) -> List[str]:
    merged: List[str] = []
    for tour in tours:
        if not merged:
            merged = list(tour)
            continue
        try:
            i = merged.index(tour[0])
        except ValueError:
            continue
        merged[i:i] = tour[1:]
    return merged


def tsp_real_world(graph: Graph, start: str = '0', ctx: Optional[TraversalContext] = None) -> TourResult:
    if graph.find_vertex(start) is None:
        logger.warning("Start node %r not found in the graph", start)
        return TourResult(method='real_world')
    start_t = time.time()
    subgraph_tours = []
    for vertex in graph.vertices():
        sub = star_subgraph(vertex)
        if sub.num_vertices() > 1:
            subgraph_tours.append(tsp_subgraph(sub, vertex.id, ctx))

    tour = merge_tours(subgraph_tours)
    runtime = time.time() - start_t
    if not is_closed_tour(tour, graph.num_vertices()) or tour[0] != start:
        logger.info("Subgraph tours do not merge into a Hamiltonian cycle from %r (%d partial tours)",
                    start, len(subgraph_tours))
        return TourResult(method='real_world', runtime=runtime)
    cost = tour_cost(graph, tour)
    if cost is None:
        logger.warning("Merged tour cannot be priced: a leg has no edge and no coordinates")
        return TourResult(method='real_world', runtime=runtime)
    return TourResult(tour=tour, cost=cost, method='real_world', runtime=runtime)
