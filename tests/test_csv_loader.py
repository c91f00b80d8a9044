"""
Unit tests for the CSV dataset readers.
"""

import pytest

from graphtsp.graph import Graph
from graphtsp.parsers.csv_loader import InputFileError, parse_toy, read_edges, read_nodes

NODES = "id,longitude,latitude\n0,-8.61,41.15\n1,-9.14,38.72\n2,-8.42,40.20\n"
EDGES_NO_HEADER = "0,1,300.5\n1,2,120\n0,9,1\n"
EDGES_HEADER = "origin,destination,haversine_distance\n0,1,300.5\n1,2,120\n"
TOY = "origem,destino,distancia\n0,1,10\n0,2,15\n1,2,35\n"
TOURISM = ("origem,destino,distancia,label origem,label destino\n"
           "0,1,250,carmo,sé\n"
           "0,2,300,carmo,ribeira\r\n"
           "1,2,450,sé,ribeira\n")


class TestReadNodes:
    def test_reads_coordinates(self, write_csv):
        g = Graph()
        assert read_nodes(g, write_csv('nodes.csv', NODES)) == 3
        v = g.find_vertex('1')
        assert (v.longitude, v.latitude, v.has_coord) == (-9.14, 38.72, True)

    def test_number_of_nodes_limit(self, write_csv):
        g = Graph()
        read_nodes(g, write_csv('nodes.csv', NODES), number_of_nodes=2)
        assert [v.id for v in g.vertices()] == ['0', '1']

    def test_missing_file(self, tmp_path):
        g = Graph()
        with pytest.raises(InputFileError, match='Could not open file'):
            read_nodes(g, str(tmp_path / 'nope.csv'))
        assert g.num_vertices() == 0

    def test_malformed_file_leaves_graph_untouched(self, write_csv):
        g = Graph()
        bad = write_csv('nodes.csv', "id,longitude,latitude\n0,-8.61,41.15\n1,west,38.72\n")
        with pytest.raises(InputFileError):
            read_nodes(g, bad)
        assert g.num_vertices() == 0

    def test_too_few_columns(self, write_csv):
        with pytest.raises(InputFileError):
            read_nodes(Graph(), write_csv('nodes.csv', "id,longitude\n0,1\n"))


class TestReadEdges:
    def test_both_directions_without_creating_vertices(self, write_csv):
        g = Graph()
        read_nodes(g, write_csv('nodes.csv', NODES))
        added = read_edges(g, write_csv('edges.csv', EDGES_NO_HEADER))
        assert added == 4
        assert g.edge_weight('0', '1') == 300.5
        assert g.edge_weight('1', '0') == 300.5
        assert g.edge_weight('2', '1') == 120
        assert '9' not in g

    def test_real_world_header(self, write_csv):
        g = Graph()
        read_nodes(g, write_csv('nodes.csv', NODES))
        read_edges(g, write_csv('edges.csv', EDGES_HEADER), real_world=True)
        assert g.num_edges() == 4

    def test_header_treated_as_data_is_rejected(self, write_csv):
        g = Graph()
        read_nodes(g, write_csv('nodes.csv', NODES))
        with pytest.raises(InputFileError):
            read_edges(g, write_csv('edges.csv', EDGES_HEADER), real_world=False)
        assert g.num_edges() == 0

    def test_empty_file(self, write_csv):
        with pytest.raises(InputFileError):
            read_edges(Graph(), write_csv('edges.csv', ""))


class TestParseToy:
    def test_creates_vertices_on_demand(self, write_csv):
        g = Graph()
        labels = parse_toy(g, write_csv('toy.csv', TOY))
        assert labels == {}
        assert g.num_vertices() == 3
        assert g.num_edges() == 6
        assert g.edge_weight('2', '1') == 35
        assert not g.find_vertex('0').has_coord

    def test_tourism_labels(self, write_csv):
        g = Graph()
        labels = parse_toy(g, write_csv('tourism.csv', TOURISM), tourism=True)
        assert labels == {'0': 'carmo', '1': 'sé', '2': 'ribeira'}
        assert g.edge_weight('0', '2') == 300

    def test_tourism_requires_label_columns(self, write_csv):
        with pytest.raises(InputFileError):
            parse_toy(Graph(), write_csv('toy.csv', TOY), tourism=True)


class TestWeightValidation:
    @pytest.mark.parametrize('weight', ['nan', '-1', ''])
    def test_edges_reject_bad_weight(self, write_csv, weight):
        g = Graph()
        read_nodes(g, write_csv('nodes.csv', NODES))
        with pytest.raises(InputFileError):
            read_edges(g, write_csv('edges.csv', f"0,1,5\n1,2,{weight}\n"))
        assert g.num_edges() == 0

    @pytest.mark.parametrize('weight', ['NaN', '-0.5'])
    def test_toy_rejects_bad_weight(self, write_csv, weight):
        g = Graph()
        with pytest.raises(InputFileError):
            parse_toy(g, write_csv('toy.csv', f"origem,destino,distancia\n0,1,{weight}\n"))
        assert g.num_vertices() == 0

    def test_zero_weight_and_negative_coordinates_accepted(self, write_csv):
        g = Graph()
        read_nodes(g, write_csv('nodes.csv', NODES))
        assert read_edges(g, write_csv('edges.csv', "0,1,0\n")) == 2
        assert g.find_vertex('0').longitude == -8.61

    def test_nan_coordinate_rejected(self, write_csv):
        with pytest.raises(InputFileError):
            read_nodes(Graph(), write_csv('nodes.csv', "id,longitude,latitude\n0,nan,41.15\n"))
