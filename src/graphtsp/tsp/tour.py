"""Tour model shared by every solver.

A tour is a list of vertex ids; a closed tour over N vertices has N + 1
entries and the same first and last id. Legs without a direct edge are priced
with the haversine distance when both endpoints carry coordinates, which
models direct "as the crow flies" legs in disconnected real-world datasets.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from graphtsp.graph import Graph

EARTH_RADIUS = 6371000.0  # metres


@dataclass
class TourResult:
    tour: List[str] = field(default_factory=list)
    cost: float = 0.0
    method: str = ''
    runtime: float = 0.0

    @property
    def empty(self) -> bool:
        return not self.tour

    def is_closed(self, n: int) -> bool:
        return is_closed_tour(self.tour, n)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two (lat, lon) points given in degrees."""
    lat1, lon1, lat2, lon2 = map(math.radians, (lat1, lon1, lat2, lon2))
    d_lat = lat2 - lat1
    d_lon = lon2 - lon1
    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return EARTH_RADIUS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def leg_cost(graph: Graph, source: str, dest: str) -> Optional[float]:
    weight = graph.edge_weight(source, dest)
    if weight is not None:
        return weight
    v1 = graph.find_vertex(source)
    v2 = graph.find_vertex(dest)
    if v1 is not None and v2 is not None and v1.has_coord and v2.has_coord:
        return haversine_distance(v1.latitude, v1.longitude, v2.latitude, v2.longitude)
    return None


def tour_cost(graph: Graph, tour: Sequence[str]) -> Optional[float]:
    """Sum of leg costs along ``tour``; None if some leg has neither an edge nor coordinates."""
    cost = 0.0
    for a, b in zip(tour, tour[1:]):
        leg = leg_cost(graph, a, b)
        if leg is None:
            return None
        cost += leg
    return cost


def is_closed_tour(tour: Sequence[str], n: int) -> bool:
    """True when ``tour`` visits ``n`` distinct vertices once each and returns to its start."""
    if n == 0 or len(tour) != n + 1 or tour[0] != tour[-1]:
        return False
    return len(set(tour[:-1])) == n
