"""Graph store: vertices, directed weighted edges and vertex lookup.

The graph owns its vertices in an insertion-ordered mapping (id -> Vertex),
which is also the vertex order every algorithm iterates in. Each vertex owns
the edges of its outgoing list and references the edges of its incoming list.

Mutators never create vertices implicitly: ``add_edge`` returns False when an
endpoint is missing and the caller decides whether to create it and retry.
Per-run traversal state does not live here, see ``graphtsp.traversal``.
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional

import networkx as nx


class Edge:
    """Directed weighted edge. ``reverse``/``selected``/``flow`` are unused by the tour algorithms."""

    def __init__(self, orig: "Vertex", dest: "Vertex", weight: float):
        self.orig = orig
        self.dest = dest
        self.weight = weight
        self.selected = False
        self.reverse: Optional[Edge] = None
        self.flow = 0.0

    def __repr__(self) -> str:
        return f"Edge({self.orig.id!r} -> {self.dest.id!r}, {self.weight})"


class Vertex:
    def __init__(self, id: str, longitude: float = 0.0, latitude: float = 0.0, has_coord: bool = False):
        self.id = id
        self.longitude = longitude
        self.latitude = latitude
        self.has_coord = has_coord
        self.adj: List[Edge] = []       # outgoing, owned
        self.incoming: List[Edge] = []  # incoming, owned by the origin vertex

    def add_edge(self, dest: "Vertex", weight: float) -> Edge:
        edge = Edge(self, dest, weight)
        self.adj.append(edge)
        dest.incoming.append(edge)
        return edge

    def remove_edge(self, dest_id: str) -> bool:
        """Remove every outgoing edge to ``dest_id``; True if at least one was removed."""
        removed = False
        for edge in [e for e in self.adj if e.dest.id == dest_id]:
            self._delete_edge(edge)
            removed = True
        return removed

    def remove_outgoing_edges(self) -> None:
        for edge in list(self.adj):
            self._delete_edge(edge)

    def _delete_edge(self, edge: Edge) -> None:
        self.adj.remove(edge)
        edge.dest.incoming.remove(edge)
        if edge.reverse is not None and edge.reverse.reverse is edge:
            edge.reverse.reverse = None

    def __repr__(self) -> str:
        if self.has_coord:
            return f"Vertex({self.id!r}, lon={self.longitude}, lat={self.latitude})"
        return f"Vertex({self.id!r})"


class Graph:
    def __init__(self):
        self._vertices: Dict[str, Vertex] = {}

    def find_vertex(self, id: str) -> Optional[Vertex]:
        return self._vertices.get(id)

    def add_vertex(self, id: str, longitude: float = 0.0, latitude: float = 0.0, has_coord: bool = False) -> bool:
        if id in self._vertices:
            return False
        self._vertices[id] = Vertex(id, longitude, latitude, has_coord)
        return True

    def remove_vertex(self, id: str) -> bool:
        """Remove a vertex together with every edge leaving or reaching it."""
        vertex = self._vertices.get(id)
        if vertex is None:
            return False
        vertex.remove_outgoing_edges()
        for edge in list(vertex.incoming):
            edge.orig._delete_edge(edge)
        del self._vertices[id]
        return True

    def add_edge(self, source: str, dest: str, weight: float) -> bool:
        v1 = self._vertices.get(source)
        v2 = self._vertices.get(dest)
        if v1 is None or v2 is None:
            return False
        v1.add_edge(v2, weight)
        return True

    def add_bidirectional_edge(self, source: str, dest: str, weight: float) -> bool:
        v1 = self._vertices.get(source)
        v2 = self._vertices.get(dest)
        if v1 is None or v2 is None:
            return False
        e1 = v1.add_edge(v2, weight)
        e2 = v2.add_edge(v1, weight)
        e1.reverse = e2
        e2.reverse = e1
        return True

    def remove_edge(self, source: str, dest: str) -> bool:
        vertex = self._vertices.get(source)
        if vertex is None:
            return False
        return vertex.remove_edge(dest)

    def edge_weight(self, source: str, dest: str) -> Optional[float]:
        """Weight of the first ``source -> dest`` edge, or None when there is no such edge."""
        vertex = self._vertices.get(source)
        if vertex is None:
            return None
        for edge in vertex.adj:
            if edge.dest.id == dest:
                return edge.weight
        return None

    def num_vertices(self) -> int:
        return len(self._vertices)

    def num_edges(self) -> int:
        return sum(len(v.adj) for v in self._vertices.values())

    def vertices(self) -> List[Vertex]:
        return list(self._vertices.values())

    def vertex_map(self) -> Dict[str, Vertex]:
        return dict(self._vertices)

    def edges(self) -> Iterator[Edge]:
        for vertex in self._vertices.values():
            yield from vertex.adj

    def to_networkx(self) -> nx.DiGraph:
        """Export as a networkx DiGraph (parallel edges collapse to the last one seen)."""
        g = nx.DiGraph()
        for v in self._vertices.values():
            if v.has_coord:
                g.add_node(v.id, pos=(v.longitude, v.latitude))
            else:
                g.add_node(v.id)
        for e in self.edges():
            g.add_edge(e.orig.id, e.dest.id, weight=e.weight)
        return g

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, id: object) -> bool:
        return id in self._vertices

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())
