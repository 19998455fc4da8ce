"""
FastAPI application factory.

* Builds the result cache and the distance engine and stores them on
  ``app.state`` for the dependency helpers.
* Translates core errors into JSON responses.
* Applies CORS and rate-limiting.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from geodist.api.middleware import limiter
from geodist.api.routes import admin, distance
from geodist.api.schemas import ErrorResponse
from geodist.config import settings
from geodist.domain.distance import vincenty_km
from geodist.domain.engine import DistanceEngine, Solver
from geodist.domain.entities import ConvergenceFailure, MalformedCoordinate
from geodist.infrastructure.cache import TwoQueueCache

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Distance service started (cache capacity=%d)", app.state.cache.capacity
    )
    yield
    logger.info("Distance service stopped, cache stats: %s", app.state.cache.stats())


async def _malformed_coordinate_handler(
    request: Request, exc: MalformedCoordinate
) -> JSONResponse:
    body = ErrorResponse(detail=str(exc), input=exc.input, side=exc.side)
    return JSONResponse(status_code=400, content=body.model_dump(mode="json"))


async def _convergence_failure_handler(
    request: Request, exc: ConvergenceFailure
) -> JSONResponse:
    body = ErrorResponse(detail=str(exc))
    return JSONResponse(
        status_code=422, content=body.model_dump(mode="json", exclude_none=True)
    )


def create_app(
    cache_capacity: Optional[int] = None, solver: Optional[Solver] = None
) -> FastAPI:
    app = FastAPI(
        title="Geodesic Distance API",
        description=(
            "Ellipsoidal (WGS-84, Vincenty) distance between two points given "
            "as H3 cells or latitude/longitude pairs, memoised in an "
            "in-process 2Q cache."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    cache: TwoQueueCache = TwoQueueCache(
        settings.cache_capacity if cache_capacity is None else cache_capacity
    )
    app.state.cache = cache
    app.state.engine = DistanceEngine(cache, solver or vincenty_km)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET"],
        allow_credentials=False,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Core errors
    app.add_exception_handler(MalformedCoordinate, _malformed_coordinate_handler)
    app.add_exception_handler(ConvergenceFailure, _convergence_failure_handler)

    # Routers
    app.include_router(distance.router)
    app.include_router(admin.router, prefix="/api/v1")

    return app
