"""Traversal utilities and the per-run traversal context.

Every algorithm keeps its scratch state (visited/processing flags, in-degrees,
tentative distances, path edges, parents) in a ``TraversalContext`` keyed by
vertex id, never on the vertices themselves. A context is reset at the start
of each run, so the same graph can serve any number of algorithms.

``dfs`` and ``bfs`` are generators: lazy, finite and not restartable.
DFS uses an explicit stack of adjacency iterators, so its order is exactly
the one of the textbook recursive preorder without the recursion limit.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterator, List, Optional, Set

from graphtsp.graph import Edge, Graph, Vertex

INF = float('inf')


class GraphNotDAGError(ValueError):
    """Raised by ``topsort`` when the graph has a cycle."""


@dataclass
class TraversalContext:
    visited: Set[str] = field(default_factory=set)
    processing: Set[str] = field(default_factory=set)
    indegree: Dict[str, int] = field(default_factory=dict)
    dist: Dict[str, float] = field(default_factory=dict)
    path: Dict[str, Optional[Edge]] = field(default_factory=dict)
    parent: Dict[str, Optional[str]] = field(default_factory=dict)

    def reset(self) -> None:
        self.visited.clear()
        self.processing.clear()
        self.indegree.clear()
        self.dist.clear()
        self.path.clear()
        self.parent.clear()

    def is_visited(self, vertex: Vertex) -> bool:
        return vertex.id in self.visited

    def distance(self, vertex: Vertex) -> float:
        return self.dist.get(vertex.id, INF)


def _prepare(ctx: Optional[TraversalContext]) -> TraversalContext:
    if ctx is None:
        return TraversalContext()
    ctx.reset()
    return ctx


def _dfs_visit(start: Vertex, ctx: TraversalContext) -> Iterator[str]:
    ctx.visited.add(start.id)
    yield start.id
    stack = [iter(start.adj)]
    while stack:
        edge = next(stack[-1], None)
        if edge is None:
            stack.pop()
            continue
        w = edge.dest
        if w.id not in ctx.visited:
            ctx.visited.add(w.id)
            yield w.id
            stack.append(iter(w.adj))


def _dfs_sweep(graph: Graph, start: Optional[Vertex], ctx: Optional[TraversalContext]) -> Iterator[str]:
    ctx = _prepare(ctx)
    if start is not None:
        yield from _dfs_visit(start, ctx)
        return
    for v in graph.vertices():
        if v.id not in ctx.visited:
            yield from _dfs_visit(v, ctx)


def _source_vertex(graph: Graph, source: Optional[str]) -> Optional[Vertex]:
    if source is None:
        return None
    start = graph.find_vertex(source)
    if start is None:
        raise KeyError(source)
    return start


def dfs(graph: Graph, source: Optional[str] = None, ctx: Optional[TraversalContext] = None) -> Iterator[str]:
    """Depth-first preorder from ``source``, or over every component in vertex order.

    An unknown ``source`` raises KeyError at call time, before iteration.
    """
    return _dfs_sweep(graph, _source_vertex(graph, source), ctx)


def _bfs_visit(start: Vertex, ctx: TraversalContext) -> Iterator[str]:
    queue: Deque[Vertex] = deque([start])
    ctx.visited.add(start.id)
    while queue:
        v = queue.popleft()
        yield v.id
        for edge in v.adj:
            w = edge.dest
            if w.id not in ctx.visited:
                ctx.visited.add(w.id)
                queue.append(w)


def _bfs_sweep(graph: Graph, start: Optional[Vertex], ctx: Optional[TraversalContext]) -> Iterator[str]:
    ctx = _prepare(ctx)
    if start is not None:
        yield from _bfs_visit(start, ctx)
        return
    for v in graph.vertices():
        if v.id not in ctx.visited:
            yield from _bfs_visit(v, ctx)


def bfs(graph: Graph, source: Optional[str] = None, ctx: Optional[TraversalContext] = None) -> Iterator[str]:
    """Breadth-first order from ``source``, or over every component in vertex order."""
    return _bfs_sweep(graph, _source_vertex(graph, source), ctx)


def _has_back_edge(start: Vertex, ctx: TraversalContext) -> bool:
    ctx.visited.add(start.id)
    ctx.processing.add(start.id)
    stack = [(start, iter(start.adj))]
    while stack:
        v, edges = stack[-1]
        edge = next(edges, None)
        if edge is None:
            ctx.processing.discard(v.id)
            stack.pop()
            continue
        w = edge.dest
        if w.id in ctx.processing:
            return True
        if w.id not in ctx.visited:
            ctx.visited.add(w.id)
            ctx.processing.add(w.id)
            stack.append((w, iter(w.adj)))
    return False


def is_dag(graph: Graph, ctx: Optional[TraversalContext] = None) -> bool:
    ctx = _prepare(ctx)
    for v in graph.vertices():
        if v.id not in ctx.visited and _has_back_edge(v, ctx):
            return False
    return True


def topsort(graph: Graph, ctx: Optional[TraversalContext] = None) -> List[str]:
    """Kahn's ordering. Raises GraphNotDAGError if a cycle is detected."""
    if not is_dag(graph, ctx):
        raise GraphNotDAGError("graph has a cycle; no topological order exists")
    ctx = _prepare(ctx)
    for v in graph.vertices():
        ctx.indegree[v.id] = len(v.incoming)
    queue = deque(v for v in graph.vertices() if ctx.indegree[v.id] == 0)
    order: List[str] = []
    while queue:
        v = queue.popleft()
        order.append(v.id)
        for edge in v.adj:
            w = edge.dest
            ctx.indegree[w.id] -= 1
            if ctx.indegree[w.id] == 0:
                queue.append(w)
    return order
