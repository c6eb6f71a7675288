"""
Graph Builder for Road Networks
===============================
Constructs an undirected NetworkX graph from OpenStreetMap points and road
segments, and snaps arbitrary coordinates onto it.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

import networkx as nx

from roadroute.data.elements import Node, NodeId, Segment
from roadroute.graph.geo import Coordinate, distance_m

logger = logging.getLogger(__name__)

# Edge attribute holding the weight in meters
WEIGHT = "distance_m"

NodeLookup = Dict[NodeId, Node]


def build_node_lookup(points: Iterable[Node]) -> NodeLookup:
    """Index points by id; the first point seen for an id wins."""
    nodes: NodeLookup = {}
    for point in points:
        if point.id not in nodes:
            nodes[point.id] = point
    return nodes


def add_road_edge(G: nx.Graph, a: Node, b: Node) -> None:
    """
    Insert an undirected edge weighted by great-circle distance.

    When the pair is already connected (overlapping segments) the smaller
    weight is kept.
    """
    weight = distance_m(a.coordinate, b.coordinate)
    existing = G.get_edge_data(a.id, b.id)
    if existing is not None and existing[WEIGHT] <= weight:
        return

    for node in (a, b):
        if node.id not in G:
            G.add_node(node.id, lat=node.lat, lon=node.lon)
    G.add_edge(a.id, b.id, **{WEIGHT: weight})


def build_road_graph(
    points: Iterable[Node],
    segments: Iterable[Segment],
) -> Tuple[nx.Graph, NodeLookup]:
    """
    Build a NetworkX graph from road points and segments.

    Every consecutive pair of ids in a segment becomes an edge when both ids
    resolve to a known point; unresolvable pairs are skipped without error.

    Args:
        points: Point records with id, lat, lon
        segments: Ordered node id chains

    Returns:
        Tuple of (graph, node lookup)
    """
    nodes = build_node_lookup(points)
    G = nx.Graph()
    skipped = 0

    for segment in segments:
        ids = segment.node_ids
        for from_id, to_id in zip(ids, ids[1:]):
            from_node = nodes.get(from_id)
            to_node = nodes.get(to_id)
            if from_node is None or to_node is None:
                skipped += 1
                continue
            if from_id == to_id:
                continue
            add_road_edge(G, from_node, to_node)

    logger.info(
        "Road graph built: %s nodes, %s edges (%s pairs skipped, %s points indexed)",
        G.number_of_nodes(), G.number_of_edges(), skipped, len(nodes),
    )
    return G, nodes


def find_nearest_node(query: Coordinate, nodes: NodeLookup) -> Optional[NodeId]:
    """
    Snap a coordinate to the closest node by linear scan.

    Ties keep the first node in lookup order. Returns None for an empty lookup.
    """
    nearest: Optional[NodeId] = None
    min_distance = float("inf")

    for node_id, node in nodes.items():
        distance = distance_m(query, node.coordinate)
        if distance < min_distance:
            min_distance = distance
            nearest = node_id

    return nearest
