"""
Geographic helpers: great-circle distance and request bounding boxes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from geopy.distance import great_circle

from roadroute.config import EARTH_MEAN_RADIUS_KM, ROAD_DATA

# Internal coordinate type: (lat, lon)
Coordinate = Tuple[float, float]


def distance_m(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in meters between two (lat, lon) coordinates."""
    return great_circle(a, b, radius=EARTH_MEAN_RADIUS_KM).meters


@dataclass(frozen=True)
class BoundingBox:
    south: float
    west: float
    north: float
    east: float

    def to_overpass(self) -> str:
        """Overpass QL bbox order: south,west,north,east."""
        return f"{self.south},{self.west},{self.north},{self.east}"


def bounding_box(
    start: Coordinate,
    end: Coordinate,
    margin_deg: float = ROAD_DATA.bbox_margin_deg,
) -> BoundingBox:
    """Envelope of two coordinates, expanded on every side by margin_deg."""
    start_lat, start_lon = start
    end_lat, end_lon = end
    return BoundingBox(
        south=min(start_lat, end_lat) - margin_deg,
        west=min(start_lon, end_lon) - margin_deg,
        north=max(start_lat, end_lat) + margin_deg,
        east=max(start_lon, end_lon) + margin_deg,
    )
