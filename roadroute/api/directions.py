"""
Directions Service for the commercial comparison route (Google Directions API).
The comparison is optional: any failure is logged and degrades to ``None``.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from roadroute.config import DIRECTIONS, DirectionsConfig
from roadroute.graph.geo import Coordinate

logger = logging.getLogger(__name__)


class TextValue(BaseModel):
    value: float
    text: str


class Leg(BaseModel):
    duration: TextValue
    distance: TextValue
    duration_in_traffic: Optional[TextValue] = None


class OverviewPolyline(BaseModel):
    points: str


class DirectionsRoute(BaseModel):
    legs: List[Leg] = Field(..., min_length=1)
    overview_polyline: OverviewPolyline


class DirectionsDocument(BaseModel):
    status: str
    routes: List[DirectionsRoute] = Field(default_factory=list)


class ComparisonRoute(BaseModel):
    travelTime: float
    distance: float
    travelTimeText: str
    distanceText: str
    polyline: str


def _format_latlon(coord: Coordinate) -> str:
    lat, lon = coord
    return f"{lat},{lon}"


def parse_directions_response(data: Any) -> Optional[ComparisonRoute]:
    """
    Normalise a Directions API document to the comparison route shape.

    Uses the first leg of the first route; the traffic-adjusted duration is
    preferred when the provider supplies one.

    Raises:
        ValidationError: if the body is not a Directions document
    """
    document = DirectionsDocument.model_validate(data)
    if document.status != "OK" or not document.routes:
        return None

    route = document.routes[0]
    leg = route.legs[0]
    duration = leg.duration_in_traffic or leg.duration

    return ComparisonRoute(
        travelTime=duration.value,
        distance=leg.distance.value,
        travelTimeText=duration.text,
        distanceText=leg.distance.text,
        polyline=route.overview_polyline.points,
    )


class DirectionsService:
    """Service for fetching the comparison route between two coordinates."""

    def __init__(self, client: httpx.AsyncClient, config: DirectionsConfig = DIRECTIONS):
        self.client = client
        self.config = config

    @property
    def enabled(self) -> bool:
        return bool(self.config.api_key)

    async def fetch_route(self, origin: Coordinate, destination: Coordinate) -> Optional[ComparisonRoute]:
        """
        Request a driving route departing now.

        Returns:
            ComparisonRoute, or None when no API key is configured, the call
            fails or times out, or the provider finds no route
        """
        if not self.enabled:
            return None

        params = {
            "origin": _format_latlon(origin),
            "destination": _format_latlon(destination),
            "key": self.config.api_key,
            "departure_time": self.config.departure_time,
            "mode": self.config.mode,
        }

        try:
            response = await self.client.get(
                self.config.url,
                params=params,
                timeout=self.config.timeout_s,
            )
            response.raise_for_status()
            route = parse_directions_response(response.json())
        except httpx.HTTPError as e:
            logger.warning(f"Google Maps API error: {e.__class__.__name__}: {e}")
            return None
        except (ValidationError, ValueError) as e:
            logger.warning(f"Google Maps API returned an unexpected document: {e}")
            return None

        if route is None:
            logger.info("Google Maps API returned no route")
        return route
