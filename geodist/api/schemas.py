"""Pydantic response schemas for the REST API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from geodist.domain.entities import Coordinate, DistanceResult
from geodist.domain.enums import Side


# ── Responses ─────────────────────────────────────────────────────────


class CoordinateResponse(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    @classmethod
    def from_domain(cls, c: Coordinate) -> "CoordinateResponse":
        return cls(lat=c.latitude, lng=c.longitude)


class DistanceData(BaseModel):
    src: CoordinateResponse
    dst: CoordinateResponse
    distance: float = Field(..., ge=0, description="Geodesic distance in km.")


class DistanceResponse(BaseModel):
    data: DistanceData

    @classmethod
    def from_domain(cls, result: DistanceResult) -> "DistanceResponse":
        return cls(
            data=DistanceData(
                src=CoordinateResponse.from_domain(result.source),
                dst=CoordinateResponse.from_domain(result.destination),
                distance=result.distance,
            )
        )


class CacheStatsResponse(BaseModel):
    capacity: int
    size: int
    recent: int
    frequent: int
    ghost: int
    hits: int
    misses: int


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
    input: Optional[str] = None
    side: Optional[Side] = None
