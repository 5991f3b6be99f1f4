import matplotlib

matplotlib.use("Agg")

from graph import UNKNOWN, Graph  # noqa: E402
from path_cost import PathCostResolver  # noqa: E402
from visualize import build_networkx_graph, draw_resolved_network, route_edges  # noqa: E402


def test_build_networkx_graph(mixed):
    g = build_networkx_graph(mixed)
    assert sorted(g.nodes) == list(range(7))
    assert g.number_of_edges() == 6
    assert g.edges[0, 1]["cost"] == 2
    assert g.edges[4, 1]["cost"] == "?"


def test_route_edges():
    assert route_edges([0, 3, 4, 1]) == [(0, 3), (3, 4), (4, 1)]
    assert route_edges([2]) == []


def test_draw_resolved_network(tmp_path, construction_roads):
    resolver = PathCostResolver(Graph(5, construction_roads))
    result = resolver.resolve_target_cost(0, 1, 5)
    output = tmp_path / "resolved.png"

    draw_resolved_network(resolver.graph, result, 0, 1, output=output)

    assert output.exists()
    assert output.stat().st_size > 0


def test_draw_without_adjustment(tmp_path):
    resolver = PathCostResolver(Graph(3, [(0, 1, UNKNOWN), (1, 2, 2)]))
    result = resolver.resolve_target_cost(0, 2, 3)
    output = tmp_path / "plain.png"

    draw_resolved_network(resolver.graph, result, 0, 2, output=output)

    assert result.designated_edge is None
    assert output.exists()
