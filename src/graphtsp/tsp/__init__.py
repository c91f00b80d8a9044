from graphtsp.tsp.backtracking import backtracking_tsp
from graphtsp.tsp.mst_approximation import create_mst_graph, mst_edges, prim, triangular_heuristic_approximation
from graphtsp.tsp.nearest_neighbor import cluster_approximation_tsp, mst_approximation_tsp
from graphtsp.tsp.real_world import merge_tours, tsp_real_world, tsp_subgraph
from graphtsp.tsp.tour import TourResult, haversine_distance, is_closed_tour, tour_cost

__all__ = [
    'TourResult',
    'backtracking_tsp',
    'cluster_approximation_tsp',
    'create_mst_graph',
    'haversine_distance',
    'is_closed_tour',
    'merge_tours',
    'mst_approximation_tsp',
    'mst_edges',
    'prim',
    'tour_cost',
    'triangular_heuristic_approximation',
    'tsp_real_world',
    'tsp_subgraph',
]
