import pytest

from graphtsp.graph import Graph

from graph_helpers import complete_graph


@pytest.fixture
def triangle():
    """Nodes 0:(0,0), 1:(0,1), 2:(1,1); AB=1, BC=1, AC=3 in both directions."""
    g = Graph()
    g.add_vertex('0', 0.0, 0.0, True)
    g.add_vertex('1', 0.0, 1.0, True)
    g.add_vertex('2', 1.0, 1.0, True)
    g.add_bidirectional_edge('0', '1', 1)
    g.add_bidirectional_edge('1', '2', 1)
    g.add_bidirectional_edge('0', '2', 3)
    return g


@pytest.fixture
def two_triangles():
    """Triangles 0-1-2 and 3-4-5 joined through the bridge 2-3."""
    g = Graph()
    for i in range(6):
        g.add_vertex(str(i), float(i), float(i % 2), True)
    for a, b, w in [('0', '1', 2), ('1', '2', 2), ('0', '2', 3),
                    ('3', '4', 2), ('4', '5', 2), ('3', '5', 3),
                    ('2', '3', 5)]:
        g.add_bidirectional_edge(a, b, w)
    return g


@pytest.fixture
def small_complete():
    return complete_graph(6, seed=7)


@pytest.fixture
def write_csv(tmp_path):
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return str(path)
    return _write
