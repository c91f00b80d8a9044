from graphtsp.parsers.csv_loader import InputFileError, parse_toy, read_edges, read_nodes

__all__ = ['InputFileError', 'parse_toy', 'read_edges', 'read_nodes']
