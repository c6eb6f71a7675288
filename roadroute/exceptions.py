"""
Named failure outcomes of a route request.

Each routing failure cause maps to its own exception so the HTTP layer (and
any other caller) can branch on the cause instead of a generic error.
"""

from __future__ import annotations

from typing import Any


class RoutingError(Exception):
    """Base class for route request failures that have a public message."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.public_message}
        detail = str(self)
        if detail and detail != self.public_message:
            payload["message"] = detail
        return payload


class InvalidInputError(RoutingError):
    """One or more required coordinates are missing or unparsable."""

    status_code = 400
    public_message = "Missing coordinates"


class DataFetchError(RoutingError):
    """The road network provider was unreachable, timed out or answered garbage."""

    status_code = 500
    public_message = "Failed to fetch OSM data"


class NoNearbyRoadError(RoutingError):
    """No graph node could be found to snap a query coordinate onto."""

    status_code = 404
    public_message = "Could not find nearby roads"


class NoPathError(RoutingError):
    """Start and end were snapped but are not connected in the road graph."""

    status_code = 404
    public_message = "No route found"


class UnknownNodeError(KeyError):
    """A node id passed to the path solver is not part of the graph."""
