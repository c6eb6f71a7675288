from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from roadroute.api.directions import DirectionsService
from roadroute.config import DIRECTIONS, PUBLIC_DIR, ROAD_DATA, SERVER
from roadroute.data.overpass import OverpassClient
from roadroute.exceptions import InvalidInputError, RoutingError
from roadroute.graph.route_adapter import RouteAdapter

logger = logging.getLogger(__name__)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)


# --------------------------------------------------------------------------- #
# Globals
# --------------------------------------------------------------------------- #
http_client: Optional[httpx.AsyncClient] = None
route_adapter: Optional[RouteAdapter] = None


# --------------------------------------------------------------------------- #
# Startup / shutdown
# --------------------------------------------------------------------------- #
@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    global http_client, route_adapter

    http_client = httpx.AsyncClient()
    directions = DirectionsService(http_client, DIRECTIONS)
    if not directions.enabled:
        logger.warning("GOOGLE_MAPS_API_KEY not set - comparison routes disabled.")
    route_adapter = RouteAdapter(
        road_data=OverpassClient(http_client, ROAD_DATA),
        directions=directions,
    )
    logger.info("Route service ready on port %s", SERVER.port)
    try:
        yield
    finally:
        await http_client.aclose()
        http_client = None
        route_adapter = None


app = FastAPI(title="Road Route Comparison API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# --------------------------------------------------------------------------- #
# Models
# --------------------------------------------------------------------------- #
class RouteRequest(BaseModel):
    startLat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    startLon: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    endLat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    endLon: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    @property
    def start(self) -> tuple[float, float]:
        return self.startLat, self.startLon

    @property
    def end(self) -> tuple[float, float]:
        return self.endLat, self.endLon


# --------------------------------------------------------------------------- #
# Error handlers
# --------------------------------------------------------------------------- #
@app.exception_handler(RoutingError)
async def routing_error_handler(_: Request, exc: RoutingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    error = InvalidInputError(f"Invalid or missing: {', '.join(fields)}" if fields else None)
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #
def get_route_adapter() -> RouteAdapter:
    if route_adapter is None:
        raise HTTPException(status_code=503, detail="Route service not ready.")
    return route_adapter


# --------------------------------------------------------------------------- #
# Routes
# --------------------------------------------------------------------------- #
@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/api/calculate-route")
async def calculate_route(
    payload: RouteRequest,
    adapter: RouteAdapter = Depends(get_route_adapter),
) -> Any:
    try:
        return await adapter.plan(payload.start, payload.end)
    except RoutingError:
        raise
    except Exception as exc:
        logger.exception("Error calculating route: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc)},
        )


# Static map page; mounted last so the API routes above take precedence
app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True, check_dir=False), name="public")


# --------------------------------------------------------------------------- #
# Entrypoint for `python -m roadroute.api.server`
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "roadroute.api.server:app",
        host=SERVER.host,
        port=SERVER.port,
        reload=SERVER.reload,
    )
