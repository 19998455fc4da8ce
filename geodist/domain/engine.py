"""
Distance Engine
===============

Flow per request
----------------
1. Parse the source and destination text (``MalformedCoordinate`` names
   the failing side).
2. Look the raw ``Query`` up in the injected cache.
3. On a miss, run the solver and insert the rounded distance.

The cache key is the text pair exactly as supplied: swapped or
differently-formatted inputs are separate entries even when they resolve
to the same coordinates.  Errors are raised to the caller and never cached.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from .distance import vincenty_km
from .entities import Coordinate, DistanceResult, MalformedCoordinate, Query
from .enums import Side
from .parsing import parse

logger = logging.getLogger(__name__)

Solver = Callable[[Coordinate, Coordinate], float]


class ResultCache(Protocol):
    def get_or_compute(self, key: Query, compute: Callable[[], float]) -> float: ...


class DistanceEngine:
    """High-level API used by the HTTP layer."""

    def __init__(self, cache: ResultCache, solver: Solver = vincenty_km):
        self.cache = cache
        self.solver = solver

    @staticmethod
    def parse_side(text: str, side: Side) -> Coordinate:
        try:
            return parse(text)
        except MalformedCoordinate as exc:
            raise exc.for_side(side) from None

    def compute(self, source_text: str, destination_text: str) -> DistanceResult:
        source = self.parse_side(source_text, Side.SOURCE)
        destination = self.parse_side(destination_text, Side.DESTINATION)

        def _solve() -> float:
            logger.debug("Cache miss for %r -> %r", source_text, destination_text)
            return self.solver(source, destination)

        distance = self.cache.get_or_compute(
            Query(source_text, destination_text), _solve
        )
        return DistanceResult(source, destination, distance)
