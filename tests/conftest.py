"""
Shared test fixtures.

The HTTP client runs the FastAPI app in-process through httpx's
``ASGITransport``; no server or network is needed.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from geodist.api.app import create_app
from geodist.api.middleware import limiter
from geodist.domain.distance import vincenty_km
from geodist.domain.engine import DistanceEngine
from geodist.infrastructure.cache import TwoQueueCache

BOSTON = "42.3541165, -71.0693514"
NEW_YORK = "40.7791472, -73.9680804"
H3_CELL = "8826085a4dfffff"


class CountingSolver:
    """Wraps a solver and records how many times it ran."""

    def __init__(self, solver=vincenty_km):
        self.solver = solver
        self.calls = 0

    def __call__(self, a, b):
        self.calls += 1
        return self.solver(a, b)


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def solver() -> CountingSolver:
    return CountingSolver()


@pytest.fixture
def cache() -> TwoQueueCache:
    return TwoQueueCache(capacity=16)


@pytest.fixture
def engine(cache: TwoQueueCache, solver: CountingSolver) -> DistanceEngine:
    return DistanceEngine(cache, solver)


@pytest_asyncio.fixture
async def client(solver: CountingSolver) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient backed by a fresh app, cache and counting solver."""
    limiter.reset()
    app = create_app(cache_capacity=16, solver=solver)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
