"""
Map Elements
============
Typed view of the raw OpenStreetMap elements returned by the road data
provider. Each raw record is resolved once into either a ``Node`` (a point
with coordinates) or a ``Segment`` (an ordered chain of node ids).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, List, Mapping, Tuple, Union

logger = logging.getLogger(__name__)

NodeId = Hashable


@dataclass(frozen=True)
class Node:
    """A graph vertex: one geographic point of the road network."""
    id: NodeId
    lat: float
    lon: float

    @property
    def coordinate(self) -> Tuple[float, float]:
        return self.lat, self.lon


@dataclass(frozen=True)
class Segment:
    """One stretch of road as an ordered tuple of node ids."""
    id: Any
    node_ids: Tuple[NodeId, ...]


Element = Union[Node, Segment]


def _parse_node(raw: Mapping[str, Any]) -> Node | None:
    lat = raw.get("lat")
    lon = raw.get("lon")
    if raw.get("id") is None or lat is None or lon is None:
        return None
    try:
        hash(raw["id"])
        return Node(id=raw["id"], lat=float(lat), lon=float(lon))
    except (TypeError, ValueError):
        return None


def _parse_segment(raw: Mapping[str, Any]) -> Segment | None:
    node_ids = raw.get("nodes")
    if not node_ids:
        return None
    try:
        node_ids = tuple(node_ids)
        hash(node_ids)
    except TypeError:
        return None
    return Segment(id=raw.get("id"), node_ids=node_ids)


def parse_element(raw: Mapping[str, Any]) -> Element | None:
    """Resolve one raw element record by its ``type`` tag; None if unusable."""
    if not isinstance(raw, Mapping):
        return None
    kind = raw.get("type")
    if kind == "node":
        return _parse_node(raw)
    if kind == "way":
        return _parse_segment(raw)
    return None


def parse_elements(
    payload: Union[Mapping[str, Any], Iterable[Mapping[str, Any]], None]
) -> Tuple[List[Node], List[Segment]]:
    """
    Split a provider response into points and segments.

    Args:
        payload: Either the full response ``{"elements": [...]}`` or the
            bare element list.

    Returns:
        Tuple of (nodes, segments) in input order
    """
    if payload is None:
        return [], []
    if isinstance(payload, Mapping):
        records = payload.get("elements") or []
    else:
        records = payload

    nodes: List[Node] = []
    segments: List[Segment] = []
    dropped = 0
    for raw in records:
        element = parse_element(raw)
        if isinstance(element, Node):
            nodes.append(element)
        elif isinstance(element, Segment):
            segments.append(element)
        else:
            dropped += 1

    if dropped:
        logger.debug("Dropped %d unusable map elements", dropped)
    return nodes, segments

