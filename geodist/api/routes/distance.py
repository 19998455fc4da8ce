"""
Distance endpoint
=================

GET /distance?src=<text>&dst=<text> -- geodesic distance in km

Each side accepts an H3 cell (hex string or decimal index) or a
``"lat, lng"`` pair.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from geodist.api.dependencies import get_engine
from geodist.api.middleware import limiter
from geodist.api.schemas import DistanceResponse, ErrorResponse
from geodist.config import settings
from geodist.domain.engine import DistanceEngine

router = APIRouter(tags=["distance"])


@router.get(
    "/distance",
    response_model=DistanceResponse,
    summary="Geodesic distance between two points",
    responses={
        400: {"model": ErrorResponse, "description": "Malformed coordinate."},
        422: {"model": ErrorResponse, "description": "Solver did not converge."},
    },
)
@limiter.limit(settings.rate_limit)
async def get_distance(
    request: Request,
    src: str = Query("", description="Source coordinate or H3 cell."),
    dst: str = Query("", description="Destination coordinate or H3 cell."),
    engine: DistanceEngine = Depends(get_engine),
):
    result = engine.compute(src, dst)
    return DistanceResponse.from_domain(result)
