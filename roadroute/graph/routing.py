"""
Routing and Path Finding on Road Graphs
=======================================
Shortest path search and the metrics displayed for a solved path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import networkx as nx

from roadroute.data.elements import NodeId
from roadroute.exceptions import UnknownNodeError
from roadroute.graph.builder import WEIGHT, NodeLookup
from roadroute.graph.geo import distance_m

Path = List[NodeId]


@dataclass
class RouteMetrics:
    """Metrics for a solved road path."""
    path: Path
    distance_m: float
    num_nodes: int
    coordinates: List[List[float]] = field(default_factory=list)

    @property
    def distance_km(self) -> str:
        return f"{self.distance_m / 1000:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distance": self.distance_m,
            "distanceKm": self.distance_km,
            "nodes": self.num_nodes,
            "coordinates": self.coordinates,
        }


def find_shortest_path_length(
    G: nx.Graph,
    source: NodeId,
    target: NodeId,
    weight: str = WEIGHT,
) -> Tuple[Path, float]:
    """
    Find shortest path between two nodes together with its total weight.

    Args:
        G: Road graph with non-negative edge weights
        source: Start node ID
        target: End node ID
        weight: Edge attribute to use as weight

    Returns:
        Tuple of (path as node list, total weight); ([], inf) when unreachable

    Raises:
        UnknownNodeError: if source or target is not in the graph
    """
    for node in (source, target):
        if node not in G:
            raise UnknownNodeError(node)

    try:
        length, path = nx.single_source_dijkstra(G, source, target, weight=weight)
        return path, length
    except nx.NetworkXNoPath:
        return [], float('inf')


def find_shortest_path(
    G: nx.Graph,
    source: NodeId,
    target: NodeId,
    weight: str = WEIGHT,
) -> Optional[Path]:
    """
    Dijkstra search from source to target.

    Returns:
        Node list from source to target inclusive, or None when the two
        nodes are not connected.
    """
    path, _ = find_shortest_path_length(G, source, target, weight)
    return path or None


def calculate_route_length(path: Path, nodes: NodeLookup) -> float:
    """Sum of great-circle distances between consecutive path nodes, in meters."""
    if not path or len(path) < 2:
        return 0.0

    total = 0.0
    for from_id, to_id in zip(path, path[1:]):
        from_node = nodes.get(from_id)
        to_node = nodes.get(to_id)
        if from_node is None or to_node is None:
            continue
        total += distance_m(from_node.coordinate, to_node.coordinate)
    return total


def path_to_coordinates(path: Path, nodes: NodeLookup) -> List[List[float]]:
    """Convert a node path to a list of [lat, lon] pairs, dropping unknown ids."""
    coords: List[List[float]] = []
    for node_id in path or []:
        node = nodes.get(node_id)
        if node is None:
            continue
        coords.append([node.lat, node.lon])
    return coords


def calculate_route_metrics(path: Path, nodes: NodeLookup) -> RouteMetrics:
    """
    Calculate display metrics for a path.

    Args:
        path: List of node IDs in path order
        nodes: Node lookup the path was solved against

    Returns:
        RouteMetrics object
    """
    return RouteMetrics(
        path=list(path),
        distance_m=calculate_route_length(path, nodes),
        num_nodes=len(path),
        coordinates=path_to_coordinates(path, nodes),
    )
