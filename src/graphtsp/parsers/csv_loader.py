"""CSV readers populating a Graph.

Three dataset families are supported:

  * real-world / extra fully connected graphs: a nodes file
    (``id,longitude,latitude``, one header line) plus an edges file
    (``source,destination,weight``; header only on real-world graphs)
  * toy graphs: a single edges file with a header,
    ``origin,destination,distance``; vertices are created on demand
    without coordinates
  * the tourism toy graph: same as toy graphs with two extra label columns
    (``label_origin,label_destination``) collected into a label table

Every reader parses and validates the whole file with pandas before touching
the graph, so a missing, unreadable or malformed file raises InputFileError
and leaves the graph unchanged. Edge weights must be non-negative numbers.
"""
from __future__ import annotations

from typing import Dict, List, Optional

import pandas as pd

from graphtsp.graph import Graph


class InputFileError(OSError):
    """A dataset file could not be opened or parsed."""


def _load(path: str, min_columns: int, header: bool, nrows: Optional[int] = None) -> pd.DataFrame:
    try:
        df = pd.read_csv(path, header=0 if header else None, dtype=str, nrows=nrows,
                         keep_default_na=False, skipinitialspace=True)
    except (OSError, ValueError, pd.errors.ParserError) as e:
        raise InputFileError(f'Could not open file "{path}"') from e
    if df.shape[1] < min_columns:
        raise InputFileError(f'Could not open file "{path}": expected {min_columns} columns, got {df.shape[1]}')
    return df.apply(lambda col: col.str.strip())


def _numeric(df: pd.DataFrame, columns: List[int], path: str) -> List[pd.Series]:
    try:
        values = [pd.to_numeric(df.iloc[:, c], errors='raise') for c in columns]
    except (ValueError, TypeError) as e:
        raise InputFileError(f'Could not open file "{path}": non-numeric value') from e
    if any(col.isna().any() for col in values):
        raise InputFileError(f'Could not open file "{path}": missing numeric value')
    return values


def _weights(df: pd.DataFrame, path: str) -> pd.Series:
    (weights,) = _numeric(df, [2], path)
    if (weights < 0).any():
        raise InputFileError(f'Could not open file "{path}": negative edge weight')
    return weights


def read_nodes(graph: Graph, path: str, number_of_nodes: int = -1) -> int:
    """Add vertices with coordinates; only the first ``number_of_nodes`` rows when positive."""
    nrows = number_of_nodes if number_of_nodes > 0 else None
    df = _load(path, 3, header=True, nrows=nrows)
    longitudes, latitudes = _numeric(df, [1, 2], path)
    added = 0
    for vid, lon, lat in zip(df.iloc[:, 0], longitudes, latitudes):
        added += graph.add_vertex(vid, float(lon), float(lat), True)
    return added


def read_edges(graph: Graph, path: str, real_world: bool = False) -> int:
    """Add both directions of every edge; rows touching unknown vertices are skipped."""
    df = _load(path, 3, header=real_world)
    weights = _weights(df, path)
    added = 0
    for src, dst, w in zip(df.iloc[:, 0], df.iloc[:, 1], weights):
        added += graph.add_edge(src, dst, float(w))
        added += graph.add_edge(dst, src, float(w))
    return added


def parse_toy(graph: Graph, path: str, tourism: bool = False) -> Dict[str, str]:
    """Load a toy graph, creating vertices on demand. Returns the label table (empty unless ``tourism``)."""
    df = _load(path, 5 if tourism else 3, header=True)
    weights = _weights(df, path)
    labels: Dict[str, str] = {}
    for i, (origin, dest, w) in enumerate(zip(df.iloc[:, 0], df.iloc[:, 1], weights)):
        if tourism and not (origin in labels and dest in labels):
            labels[origin] = df.iat[i, 3]
            labels[dest] = df.iat[i, 4].rstrip('\r')
        w = float(w)
        if not graph.add_edge(origin, dest, w):
            graph.add_vertex(origin, 0, 0, False)
            graph.add_vertex(dest, 0, 0, False)
            graph.add_edge(origin, dest, w)
        graph.add_edge(dest, origin, w)
    return labels
