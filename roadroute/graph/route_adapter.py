"""
Route adapter that bridges the graph builder/routing utilities to
API-friendly helpers. For every request it fetches the surrounding road
network, builds a fresh graph, snaps both endpoints onto it and solves the
shortest path, returning JSON-friendly results.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from fastapi.concurrency import run_in_threadpool

from roadroute.api.directions import ComparisonRoute, DirectionsService
from roadroute.config import ROAD_DATA
from roadroute.data.elements import NodeId, parse_elements
from roadroute.data.overpass import OverpassClient
from roadroute.exceptions import NoNearbyRoadError, NoPathError
from roadroute.graph.builder import build_road_graph, find_nearest_node
from roadroute.graph.geo import Coordinate, bounding_box
from roadroute.graph.routing import RouteMetrics, calculate_route_metrics, find_shortest_path

logger = logging.getLogger(__name__)


@dataclass
class RouteResult:
    metrics: RouteMetrics
    start_node: NodeId
    end_node: NodeId


class RouteAdapter:
    """
    Per-request routing pipeline.

    Holds only the provider clients; graphs, node lookups and paths live for
    a single call and are never shared.
    """

    def __init__(
        self,
        road_data: OverpassClient,
        directions: Optional[DirectionsService] = None,
        bbox_margin_deg: float = ROAD_DATA.bbox_margin_deg,
    ) -> None:
        self.road_data = road_data
        self.directions = directions
        self.bbox_margin_deg = bbox_margin_deg

    # ----------------------------------------------------------------- pipeline
    @staticmethod
    def compute_route(
        start: Coordinate,
        end: Coordinate,
        elements: Mapping[str, Any],
    ) -> RouteResult:
        """
        Build the road graph from raw elements and solve start -> end.

        Raises:
            NoNearbyRoadError: no node to snap onto
            NoPathError: the snapped nodes are not connected
        """
        points, segments = parse_elements(elements)
        G, nodes = build_road_graph(points, segments)

        start_node = find_nearest_node(start, nodes)
        end_node = find_nearest_node(end, nodes)
        if start_node is None or end_node is None:
            raise NoNearbyRoadError()

        # A point that belongs to no usable segment never made it into the graph
        if start_node not in G or end_node not in G:
            raise NoPathError(f"Snapped node {start_node if start_node not in G else end_node} has no roads")

        path = find_shortest_path(G, start_node, end_node)
        if path is None:
            raise NoPathError()

        metrics = calculate_route_metrics(path, nodes)
        logger.info(
            "Route %s -> %s: %d nodes, %.1f m", start_node, end_node, metrics.num_nodes, metrics.distance_m
        )
        return RouteResult(metrics=metrics, start_node=start_node, end_node=end_node)

    # ------------------------------------------------------------- public API
    async def _comparison_route(self, start: Coordinate, end: Coordinate) -> Optional[ComparisonRoute]:
        if self.directions is None:
            return None
        return await self.directions.fetch_route(start, end)

    async def plan(self, start: Coordinate, end: Coordinate) -> Dict[str, Any]:
        """
        Compute the shortest road route between two (lat, lon) points and the
        commercial comparison route.

        Returns:
            The ``/api/calculate-route`` response payload
        """
        bbox = bounding_box(start, end, self.bbox_margin_deg)

        # Both fetches run concurrently; a failed road fetch abandons the comparison
        comparison_task = asyncio.create_task(self._comparison_route(start, end))
        try:
            elements = await self.road_data.fetch_road_network(bbox)
        except Exception:
            comparison_task.cancel()
            raise
        comparison = await comparison_task

        result = await run_in_threadpool(self.compute_route, start, end, elements)

        return {
            "success": True,
            "dijkstra": result.metrics.to_dict(),
            "googleMaps": comparison.model_dump() if comparison is not None else None,
            "startNode": result.start_node,
            "endNode": result.end_node,
        }
