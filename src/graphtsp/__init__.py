"""Travelling-salesman tours over weighted location graphs."""
from graphtsp.data import TSPData
from graphtsp.graph import Edge, Graph, Vertex
from graphtsp.mutable_priority_queue import MutablePriorityQueue
from graphtsp.parsers.csv_loader import InputFileError
from graphtsp.traversal import GraphNotDAGError, TraversalContext, bfs, dfs, is_dag, topsort
from graphtsp.tsp.tour import TourResult

__version__ = '0.1.0'

__all__ = [
    'Edge',
    'Graph',
    'GraphNotDAGError',
    'InputFileError',
    'MutablePriorityQueue',
    'TSPData',
    'TourResult',
    'TraversalContext',
    'Vertex',
    'bfs',
    'dfs',
    'is_dag',
    'topsort',
]
