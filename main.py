"""
Road Route Comparison - Main Entry Point
========================================
Serves the routing API or computes a single route from the command line.

Usage:
    python main.py --stage serve                                  # Run the HTTP API
    python main.py --stage route --start 51.50,-0.12 --end 51.52,-0.10
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Tuple

import httpx

from roadroute.api.directions import DirectionsService
from roadroute.config import DIRECTIONS, ROAD_DATA, SERVER
from roadroute.data.overpass import OverpassClient
from roadroute.exceptions import RoutingError
from roadroute.graph.route_adapter import RouteAdapter


def parse_latlon(value: str) -> Tuple[float, float]:
    """Parse a 'lat,lon' command line value."""
    try:
        lat, lon = (float(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LAT,LON, got {value!r}")
    return lat, lon


def stage_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "roadroute.api.server:app",
        host=args.host,
        port=args.port,
        reload=SERVER.reload,
    )
    return 0


async def _plan(start, end):
    async with httpx.AsyncClient() as client:
        adapter = RouteAdapter(
            road_data=OverpassClient(client, ROAD_DATA),
            directions=DirectionsService(client, DIRECTIONS),
        )
        return await adapter.plan(start, end)


def stage_route(args):
    """Compute one route and print the response payload as JSON."""
    if args.start is None or args.end is None:
        print("--start and --end are required for --stage route", file=sys.stderr)
        return 2

    try:
        result = asyncio.run(_plan(args.start, args.end))
    except RoutingError as exc:
        print(json.dumps(exc.to_payload(), indent=2))
        return 1

    if not args.coordinates:
        result["dijkstra"]["coordinates"] = f"<{len(result['dijkstra']['coordinates'])} points>"
    print(json.dumps(result, indent=2))
    return 0


def main():
    parser = argparse.ArgumentParser(description="Road Route Comparison")
    parser.add_argument("--stage", choices=["serve", "route"], default="serve")
    parser.add_argument("--host", default=SERVER.host)
    parser.add_argument("--port", type=int, default=SERVER.port)
    parser.add_argument("--start", type=parse_latlon, help="Start point as LAT,LON")
    parser.add_argument("--end", type=parse_latlon, help="End point as LAT,LON")
    parser.add_argument("--coordinates", action="store_true", help="Print the full route trace")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    if args.stage == "route":
        return stage_route(args)
    return stage_serve(args)


if __name__ == "__main__":
    raise SystemExit(main())
