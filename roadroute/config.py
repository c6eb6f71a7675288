"""
Road Route Comparison - Configuration
=====================================
Central configuration for paths, upstream providers and server settings.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

# ============================================================================
# PROJECT PATHS
# ============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
PUBLIC_DIR = PROJECT_ROOT / "public"
INDEX_PAGE = PUBLIC_DIR / "index.html"

# ============================================================================
# ROAD NETWORK PROVIDER (OpenStreetMap Overpass API)
# ============================================================================
@dataclass
class RoadDataConfig:
    """Settings for fetching the raw road network around a route request"""
    overpass_url: str = field(
        default_factory=lambda: os.getenv("OVERPASS_URL", "https://overpass-api.de/api/interpreter")
    )
    timeout_s: float = field(default_factory=lambda: float(os.getenv("OVERPASS_TIMEOUT", "30")))
    bbox_margin_deg: float = 0.02  # Expansion around the start/end envelope
    highway_filter: str = '["highway"]'  # Any OSM way tagged as a road

ROAD_DATA = RoadDataConfig()

# ============================================================================
# COMPARISON ROUTE PROVIDER (Google Directions API)
# ============================================================================
@dataclass
class DirectionsConfig:
    """Settings for the optional commercial comparison route"""
    url: str = "https://maps.googleapis.com/maps/api/directions/json"
    api_key: Optional[str] = field(default_factory=lambda: os.getenv("GOOGLE_MAPS_API_KEY") or None)
    timeout_s: float = field(default_factory=lambda: float(os.getenv("DIRECTIONS_TIMEOUT", "10")))
    mode: str = "driving"
    departure_time: str = "now"  # Real-time hint so traffic-adjusted durations are returned

DIRECTIONS = DirectionsConfig()

# ============================================================================
# ROUTING CONSTANTS
# ============================================================================
EARTH_MEAN_RADIUS_KM = 6371.009  # Same mean radius geopy uses for great-circle distance

# ============================================================================
# SERVER SETTINGS
# ============================================================================
@dataclass
class ServerConfig:
    """HTTP server settings"""
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    reload: bool = False

SERVER = ServerConfig()
