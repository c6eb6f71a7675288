"""
Road Network Loader (OpenStreetMap Overpass API)
================================================
Fetches the raw road elements inside a bounding box.

Sole responsibility: talk to Overpass over HTTP and hand back the raw
element payload. Graph construction lives in ``roadroute.graph.builder``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from roadroute.config import ROAD_DATA, RoadDataConfig
from roadroute.exceptions import DataFetchError
from roadroute.graph.geo import BoundingBox

logger = logging.getLogger(__name__)


def build_road_query(bbox: BoundingBox, highway_filter: str = ROAD_DATA.highway_filter) -> str:
    """
    Overpass QL selecting every road way in the box plus its member nodes.

    ``>`` recurses down from the ways so the points they reference are
    returned too; ``out skel qt`` keeps those point records minimal.
    """
    return (
        "[out:json];\n"
        "(\n"
        f"    way{highway_filter}({bbox.to_overpass()});\n"
        ");\n"
        "out body;\n"
        ">;\n"
        "out skel qt;\n"
    )


class OverpassClient:
    """Road data provider client; a failed fetch aborts the route request."""

    def __init__(self, client: httpx.AsyncClient, config: RoadDataConfig = ROAD_DATA) -> None:
        self.client = client
        self.config = config

    async def fetch_road_network(self, bbox: BoundingBox) -> Dict[str, Any]:
        """
        POST the road query for ``bbox``.

        Returns:
            The decoded response, ``{"elements": [...], ...}``

        Raises:
            DataFetchError: on transport errors, timeouts, non-2xx answers or
                a body that is not an Overpass JSON document
        """
        query = build_road_query(bbox, self.config.highway_filter)
        logger.info("Fetching OSM road network for bbox %s", bbox.to_overpass())

        try:
            response = await self.client.post(
                self.config.overpass_url,
                content=query,
                headers={"Content-Type": "text/plain"},
                timeout=self.config.timeout_s,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            logger.error("Error fetching OSM data: %s", exc)
            raise DataFetchError(str(exc) or exc.__class__.__name__) from exc
        except ValueError as exc:
            logger.error("Overpass returned a non-JSON body: %s", exc)
            raise DataFetchError("Overpass returned a non-JSON body") from exc

        if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
            raise DataFetchError("Overpass response has no element list")

        logger.info("Received %d OSM elements", len(data["elements"]))
        return data
