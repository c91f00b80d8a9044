"""
Unit tests for Prim's algorithm and the MST-based 2-approximation.
"""

import networkx as nx
import pytest

from graphtsp.graph import Graph
from graphtsp.traversal import TraversalContext
from graphtsp.tsp.backtracking import backtracking_tsp
from graphtsp.tsp.mst_approximation import create_mst_graph, mst_edges, prim, triangular_heuristic_approximation
from graphtsp.tsp.tour import is_closed_tour, tour_cost

from graph_helpers import complete_graph


def edge_set(edges):
    return {frozenset((e.orig.id, e.dest.id)) for e in edges}


class TestPrim:
    def test_triangle_mst(self, triangle):
        ctx = prim(triangle, '0')
        edges = mst_edges(ctx)
        assert edge_set(edges) == {frozenset(('0', '1')), frozenset(('1', '2'))}
        assert sum(e.weight for e in edges) == 2
        assert ctx.path['0'] is None
        assert ctx.visited == {'0', '1', '2'}

    @pytest.mark.parametrize('seed', range(4))
    def test_weight_matches_networkx(self, seed):
        g = complete_graph(9, seed=seed)
        expected = nx.minimum_spanning_tree(g.to_networkx().to_undirected()).size(weight='weight')
        assert sum(e.weight for e in mst_edges(prim(g))) == pytest.approx(expected)

    def test_default_start_is_first_vertex(self, triangle):
        ctx = prim(triangle)
        assert ctx.dist['0'] == 0

    def test_records_parents(self, triangle):
        ctx = prim(triangle, '0', record_parent=True)
        assert ctx.parent == {'0': None, '1': '0', '2': '1'}

    def test_empty_graph(self):
        ctx = prim(Graph())
        assert mst_edges(ctx) == []

    def test_only_reaches_start_component(self, two_triangles):
        two_triangles.remove_edge('2', '3')
        two_triangles.remove_edge('3', '2')
        ctx = prim(two_triangles, '0')
        assert ctx.visited == {'0', '1', '2'}
        assert len(mst_edges(ctx)) == 2


class TestMSTGraph:
    def test_bidirectional_tree(self, small_complete):
        mst = create_mst_graph(small_complete, prim(small_complete))
        n = small_complete.num_vertices()
        assert mst.num_vertices() == n
        assert mst.num_edges() == 2 * (n - 1)
        for e in mst.edges():
            assert mst.edge_weight(e.dest.id, e.orig.id) == e.weight

    def test_independent_of_original(self, triangle):
        mst = create_mst_graph(triangle, prim(triangle))
        triangle.remove_vertex('1')
        assert mst.edge_weight('0', '1') == 1
        assert mst.find_vertex('1').has_coord

    def test_edge_origin_after_destination(self):
        # '1' is reached from '2', which comes later in vertex order
        g = Graph()
        for vid in '012':
            g.add_vertex(vid)
        g.add_bidirectional_edge('0', '2', 1)
        g.add_bidirectional_edge('2', '1', 1)
        g.add_bidirectional_edge('0', '1', 5)
        mst = create_mst_graph(g, prim(g, '0'))
        assert mst.edge_weight('1', '2') == 1
        assert mst.edge_weight('0', '1') is None
        assert mst.num_edges() == 4


class TestTriangularHeuristic:
    def test_triangle(self, triangle):
        res = triangular_heuristic_approximation(triangle, '0')
        assert res.tour == ['0', '1', '2', '0']
        assert res.cost == 5
        assert res.cost <= 2 * backtracking_tsp(triangle).cost

    @pytest.mark.parametrize('seed', range(5))
    def test_two_approximation_on_euclidean_graphs(self, seed):
        g = complete_graph(7, seed=seed, euclidean=True)
        res = triangular_heuristic_approximation(g, '0')
        assert is_closed_tour(res.tour, 7)
        assert res.cost == pytest.approx(tour_cost(g, res.tour))
        assert res.cost <= 2 * backtracking_tsp(g).cost + 1e-9

    def test_disconnected_graph_uses_haversine(self):
        g = Graph()
        g.add_vertex('a', 0.0, 0.0, True)
        g.add_vertex('b', 0.0, 1.0, True)
        g.add_vertex('c', 10.0, 10.0, True)
        g.add_vertex('d', 10.0, 11.0, True)
        g.add_bidirectional_edge('a', 'b', 100)
        g.add_bidirectional_edge('c', 'd', 100)
        res = triangular_heuristic_approximation(g, 'a')
        assert res.tour == ['a', 'b', 'c', 'd', 'a']
        assert is_closed_tour(res.tour, 4)
        assert res.cost == pytest.approx(tour_cost(g, res.tour))
        assert res.cost > 200

    def test_unpriceable_tour_is_empty(self):
        g = Graph()
        for vid in 'abc':
            g.add_vertex(vid)
        g.add_bidirectional_edge('a', 'b', 1)
        g.add_bidirectional_edge('b', 'c', 1)
        res = triangular_heuristic_approximation(g, 'a')
        assert res.empty
        assert res.cost == 0

    def test_missing_start(self, triangle):
        assert triangular_heuristic_approximation(triangle, 'x').empty

    def test_idempotent(self, small_complete):
        ctx = TraversalContext()
        first = triangular_heuristic_approximation(small_complete, '0', ctx)
        second = triangular_heuristic_approximation(small_complete, '0', ctx)
        assert (first.tour, first.cost) == (second.tour, second.cost)
