"""
Domain value objects and errors.

All values are immutable: a ``Coordinate`` is freely shared between the
parser, the solver and response formatting, and a ``Query`` is hashed as a
cache key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .enums import Side


# ── Errors ────────────────────────────────────────────────────────────


class CoreError(Exception):
    """Base class for every failure surfaced by the distance engine."""


class MalformedCoordinate(CoreError):
    """Raised when text matches none of the coordinate grammars."""

    def __init__(self, text: str, side: Optional[Side] = None):
        self.input = text
        self.side = side
        where = f" ({side.value})" if side else ""
        super().__init__(f"Malformed coordinate{where}: {text!r}")

    def for_side(self, side: Side) -> "MalformedCoordinate":
        return MalformedCoordinate(self.input, side)


class ConvergenceFailure(CoreError):
    """Raised when Vincenty's iteration hits its cap without converging."""

    def __init__(self, iterations: int):
        self.iterations = iterations
        super().__init__(
            f"Vincenty formula failed to converge after {iterations} iterations"
        )


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude}, {self.longitude}"


@dataclass(frozen=True)
class Query:
    """Raw ``(source, destination)`` text pair; compared byte-for-byte."""

    source: str
    destination: str


@dataclass(frozen=True)
class DistanceResult:
    source: Coordinate
    destination: Coordinate
    distance: float  # km
