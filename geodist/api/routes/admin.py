"""
Admin / observability endpoints
===============================

GET /api/v1/admin/cache  -- result cache occupancy and hit counters
GET /api/v1/admin/health -- simple health check
"""

from fastapi import APIRouter, Depends, Request

from geodist.api.dependencies import get_cache
from geodist.api.middleware import limiter
from geodist.api.schemas import CacheStatsResponse, HealthResponse
from geodist.config import settings
from geodist.infrastructure.cache import TwoQueueCache

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/cache",
    response_model=CacheStatsResponse,
    summary="Result cache statistics",
)
@limiter.limit(settings.rate_limit)
async def get_cache_stats(
    request: Request,
    cache: TwoQueueCache = Depends(get_cache),
):
    return CacheStatsResponse(**cache.stats())


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
