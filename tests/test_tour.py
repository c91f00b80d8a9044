"""
Unit tests for tour pricing and validation.
"""

import math

import pytest

from graphtsp.graph import Graph
from graphtsp.tsp.tour import TourResult, haversine_distance, is_closed_tour, leg_cost, tour_cost


class TestHaversine:
    def test_one_degree_of_latitude(self):
        assert haversine_distance(0, 0, 1, 0) == pytest.approx(6371000 * math.pi / 180, rel=1e-9)

    def test_zero_distance(self):
        assert haversine_distance(41.15, -8.61, 41.15, -8.61) == 0

    def test_symmetric(self):
        d1 = haversine_distance(41.15, -8.61, 38.72, -9.14)
        d2 = haversine_distance(38.72, -9.14, 41.15, -8.61)
        assert d1 == pytest.approx(d2)
        # Porto - Lisbon, roughly 274 km
        assert 270_000 < d1 < 280_000


class TestTourCost:
    def test_sum_of_edges(self, triangle):
        assert tour_cost(triangle, ['0', '1', '2', '0']) == 5

    def test_haversine_fallback(self, triangle):
        triangle.remove_edge('2', '0')
        expected = 2 + haversine_distance(1.0, 1.0, 0.0, 0.0)
        assert tour_cost(triangle, ['0', '1', '2', '0']) == pytest.approx(expected)
        assert leg_cost(triangle, '2', '0') == pytest.approx(haversine_distance(1.0, 1.0, 0.0, 0.0))

    def test_unpriceable_leg(self):
        g = Graph()
        g.add_vertex('a')
        g.add_vertex('b')
        g.add_edge('a', 'b', 1)
        assert tour_cost(g, ['a', 'b', 'a']) is None

    def test_single_vertex_tour(self, triangle):
        assert tour_cost(triangle, ['0']) == 0


class TestClosedTour:
    @pytest.mark.parametrize('tour,n,expected', [
        (['0', '1', '2', '0'], 3, True),
        (['0', '1', '2'], 3, False),
        (['0', '1', '1', '0'], 3, False),
        (['0', '1', '2', '1'], 3, False),
        ([], 0, False),
    ])
    def test_is_closed_tour(self, tour, n, expected):
        assert is_closed_tour(tour, n) is expected

    def test_result_helpers(self):
        assert TourResult().empty
        assert TourResult(tour=['a', 'b', 'a'], cost=2).is_closed(2)
