"""FastAPI dependency injection helpers."""

from fastapi import Request

from geodist.domain.engine import DistanceEngine
from geodist.infrastructure.cache import TwoQueueCache


def get_engine(request: Request) -> DistanceEngine:
    """Return the engine built by the app factory."""
    return request.app.state.engine


def get_cache(request: Request) -> TwoQueueCache:
    return request.app.state.cache
