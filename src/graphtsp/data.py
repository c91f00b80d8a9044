"""Results holder: one dataset, its metadata and the last tour of every algorithm."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from graphtsp.graph import Graph
from graphtsp.parsers.csv_loader import parse_toy, read_edges, read_nodes
from graphtsp.traversal import TraversalContext
from graphtsp.tsp.backtracking import backtracking_tsp
from graphtsp.tsp.mst_approximation import triangular_heuristic_approximation
from graphtsp.tsp.nearest_neighbor import cluster_approximation_tsp, mst_approximation_tsp
from graphtsp.tsp.real_world import tsp_real_world
from graphtsp.tsp.tour import TourResult

logger = logging.getLogger(__name__)

DEFAULT_START = '0'


class TSPData:
    """Owns the graph of one dataset and runs the tour algorithms on it.

    Runs are serialised through a single TraversalContext that every
    algorithm resets on entry; results keep vertex ids only, so they stay
    valid after the graph is modified.
    """

    def __init__(self, graph: Optional[Graph] = None):
        self.network = graph if graph is not None else Graph()
        self.tourism = False
        self._labels: Dict[str, str] = {}
        self._ctx = TraversalContext()
        self.results: Dict[str, TourResult] = {}

    # -- loading --------------------------------------------------------
    # Each loader fills a fresh graph and only replaces the current dataset
    # once every file has been read.
    def _replace(self, graph: Graph, tourism: bool, labels: Optional[Dict[str, str]] = None) -> None:
        self.network = graph
        self.tourism = tourism
        self._labels = dict(labels or {})
        self.results.clear()
        self._ctx.reset()
        logger.debug("Loaded %d vertices, %d edges", graph.num_vertices(), graph.num_edges())

    def load_toy_graph(self, edges_path: str, tourism: bool = False) -> None:
        graph = Graph()
        labels = parse_toy(graph, edges_path, tourism)
        self._replace(graph, tourism, labels)

    def load_real_world_graph(self, nodes_path: str, edges_path: str) -> None:
        graph = Graph()
        read_nodes(graph, nodes_path)
        read_edges(graph, edges_path, real_world=True)
        self._replace(graph, False)

    def load_extra_fully_connected_graph(self, nodes_path: str, edges_path: str, number_of_nodes: int = -1) -> None:
        graph = Graph()
        read_nodes(graph, nodes_path, number_of_nodes)
        read_edges(graph, edges_path, real_world=False)
        self._replace(graph, False)

    # -- algorithms -----------------------------------------------------
    def _store(self, key: str, result: TourResult) -> TourResult:
        self.results[key] = result
        return result

    def backtracking_tsp(self, start: str = DEFAULT_START, prune: bool = False) -> TourResult:
        return self._store('backtracking', backtracking_tsp(self.network, start, self._ctx, prune))

    def triangular_heuristic_approximation(self, start: str = DEFAULT_START) -> TourResult:
        return self._store('triangular', triangular_heuristic_approximation(self.network, start, self._ctx))

    def cluster_approximation_tsp(self, start: str = DEFAULT_START) -> TourResult:
        return self._store('cluster', cluster_approximation_tsp(self.network, start, self._ctx))

    def mst_approximation_tsp(self, start: str = DEFAULT_START) -> TourResult:
        return self._store('mst', mst_approximation_tsp(self.network, start, self._ctx))

    def tsp_real_world(self, start: str = DEFAULT_START) -> TourResult:
        return self._store('real_world', tsp_real_world(self.network, start, self._ctx))

    def _result(self, key: str) -> TourResult:
        return self.results.get(key, TourResult(method=key))

    @property
    def best_tour(self) -> List[str]:
        return self._result('backtracking').tour

    @property
    def best_cost(self) -> float:
        return self._result('backtracking').cost

    @property
    def approximation_tour(self) -> List[str]:
        return self._result('triangular').tour

    @property
    def approximation_tour_cost(self) -> float:
        return self._result('triangular').cost

    @property
    def cluster_tour(self) -> List[str]:
        return self._result('cluster').tour

    @property
    def cluster_tour_cost(self) -> float:
        return self._result('cluster').cost

    @property
    def mst_tour(self) -> List[str]:
        return self._result('mst').tour

    @property
    def mst_tour_cost(self) -> float:
        return self._result('mst').cost

    @property
    def real_world_tour(self) -> List[str]:
        return self._result('real_world').tour

    # -- bookkeeping ----------------------------------------------------
    def reset_nodes_visitation(self) -> None:
        self._ctx.reset()

    def is_tourism(self) -> bool:
        return self.tourism

    def tourism_labels(self) -> Dict[str, str]:
        return dict(self._labels)

    def label(self, vertex_id: str) -> str:
        return self._labels.get(vertex_id, vertex_id)

    def coordinates(self, vertex_id: str) -> Optional[Tuple[float, float]]:
        """(longitude, latitude) of a vertex, or None when unknown or without coordinates."""
        v = self.network.find_vertex(vertex_id)
        if v is None or not v.has_coord:
            return None
        return v.longitude, v.latitude

    def remove_vertex(self, vertex_id: str) -> bool:
        if self.network.find_vertex(vertex_id) is None:
            logger.warning("Vertex %r not found in the graph", vertex_id)
            return False
        return self.network.remove_vertex(vertex_id)

    def remove_edge(self, source: str, dest: str) -> bool:
        if self.network.find_vertex(source) is None or self.network.find_vertex(dest) is None:
            logger.warning("One or both vertices (%r, %r) not found in the graph", source, dest)
            return False
        return self.network.remove_edge(source, dest)
