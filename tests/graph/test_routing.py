# tests/graph/test_routing.py
import networkx as nx
import pytest

from roadroute.data.elements import Node, Segment
from roadroute.exceptions import UnknownNodeError
from roadroute.graph.builder import WEIGHT, build_node_lookup, build_road_graph
from roadroute.graph.geo import distance_m
from roadroute.graph.routing import (
    calculate_route_length,
    calculate_route_metrics,
    find_shortest_path,
    find_shortest_path_length,
    path_to_coordinates,
)

A = Node("A", 0.0, 0.0)
B = Node("B", 0.0, 0.001)
C = Node("C", 0.0, 0.002)


def weighted_graph(edges):
    G = nx.Graph()
    for u, v, w in edges:
        G.add_edge(u, v, **{WEIGHT: w})
    return G


# ---- solver ----
def test_three_node_chain():
    G, nodes = build_road_graph([A, B, C], [Segment(1, ("A", "B", "C"))])

    path = find_shortest_path(G, "A", "C")
    assert path == ["A", "B", "C"]

    expected = distance_m(A.coordinate, B.coordinate) + distance_m(B.coordinate, C.coordinate)
    assert calculate_route_length(path, nodes) == pytest.approx(expected)
    assert path_to_coordinates(path, nodes) == [[0.0, 0.0], [0.0, 0.001], [0.0, 0.002]]


def test_start_equals_end():
    G = weighted_graph([("s", "t", 1.0)])
    assert find_shortest_path(G, "s", "s") == ["s"]
    assert find_shortest_path_length(G, "s", "s") == (["s"], 0)


def test_prefers_lighter_detour_over_heavy_direct_edge():
    G = weighted_graph([
        ("s", "t", 10.0),
        ("s", "a", 2.0),
        ("a", "b", 2.0),
        ("b", "t", 2.0),
    ])
    assert find_shortest_path(G, "s", "t") == ["s", "a", "b", "t"]
    assert find_shortest_path(G, "t", "s") == ["t", "b", "a", "s"]


def test_zero_weight_edges():
    G = weighted_graph([("s", "a", 0.0), ("a", "t", 0.0), ("s", "t", 1.0)])
    path, total = find_shortest_path_length(G, "s", "t")
    assert path == ["s", "a", "t"]
    assert total == 0.0


def test_disjoint_components_have_no_path():
    G = weighted_graph([("a", "b", 1.0), ("c", "d", 1.0)])
    assert find_shortest_path(G, "a", "d") is None
    assert find_shortest_path_length(G, "a", "d") == ([], float("inf"))


def test_unknown_node_is_a_contract_violation():
    G = weighted_graph([("a", "b", 1.0)])
    with pytest.raises(UnknownNodeError):
        find_shortest_path(G, "a", "zzz")
    with pytest.raises(KeyError):
        find_shortest_path(G, "zzz", "a")


def test_equal_cost_paths_report_equal_length():
    G = weighted_graph([
        ("s", "a", 1.0), ("a", "t", 1.0),
        ("s", "b", 1.0), ("b", "t", 1.0),
    ])
    path, total = find_shortest_path_length(G, "s", "t")
    assert total == pytest.approx(2.0)
    assert path[0] == "s" and path[-1] == "t" and len(path) == 3


def test_mixed_node_id_types_are_never_compared():
    G = weighted_graph([(1, "x", 1.0), (1, (2, 3), 1.0), ("x", 4.5, 1.0), ((2, 3), 4.5, 1.0)])
    path, total = find_shortest_path_length(G, 1, 4.5)
    assert total == pytest.approx(2.0)
    assert path[0] == 1 and path[-1] == 4.5


def test_larger_grid_matches_networkx():
    G = nx.grid_2d_graph(6, 6)
    for i, (u, v) in enumerate(G.edges()):
        G[u][v][WEIGHT] = float((i * 7) % 5 + 1)

    _, total = find_shortest_path_length(G, (0, 0), (5, 5))
    assert total == pytest.approx(nx.dijkstra_path_length(G, (0, 0), (5, 5), weight=WEIGHT))


# ---- metrics ----
def test_length_of_short_paths_is_zero():
    nodes = build_node_lookup([A])
    assert calculate_route_length(["A"], nodes) == 0.0
    assert calculate_route_length([], nodes) == 0.0


def test_length_is_sum_of_pairwise_distances():
    D = Node("D", 0.003, 0.004)
    nodes = build_node_lookup([A, B, C, D])
    path = ["A", "D", "B", "C"]
    expected = sum(distance_m(nodes[u].coordinate, nodes[v].coordinate) for u, v in zip(path, path[1:]))
    assert calculate_route_length(path, nodes) == pytest.approx(expected)


def test_unresolvable_ids_are_dropped_from_coordinates():
    nodes = build_node_lookup([A, C])
    assert path_to_coordinates(["A", "missing", "C"], nodes) == [[0.0, 0.0], [0.0, 0.002]]


def test_route_metrics_payload():
    nodes = build_node_lookup([A, B, C])
    metrics = calculate_route_metrics(["A", "B", "C"], nodes)

    payload = metrics.to_dict()
    assert payload["nodes"] == 3
    assert payload["distance"] == pytest.approx(222.39, abs=0.01)
    assert payload["distanceKm"] == "0.22"
    assert payload["coordinates"] == [[0.0, 0.0], [0.0, 0.001], [0.0, 0.002]]


def test_single_node_metrics():
    metrics = calculate_route_metrics(["A"], build_node_lookup([A]))
    assert metrics.distance_m == 0.0
    assert metrics.distance_km == "0.00"
    assert metrics.coordinates == [[0.0, 0.0]]


def test_path_length_is_sum_of_graph_weights():
    G, _ = build_road_graph([A, B, C], [Segment(1, ("A", "B", "C"))])

    path, total = find_shortest_path_length(G, "A", "C")
    assert path == ["A", "B", "C"]
    assert total == pytest.approx(G["A"]["B"][WEIGHT] + G["B"]["C"][WEIGHT])

    with pytest.raises(UnknownNodeError):
        find_shortest_path_length(G, "A", "missing")
