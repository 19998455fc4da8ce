"""
Coordinate Parser
=================

Turns caller-supplied text into a ``Coordinate``.  Three grammars are tried
in a fixed order and the first match wins:

1. **H3 cell, string form**  -- e.g. ``8826085a4dfffff``  -> cell centroid
2. **H3 cell, integer form** -- e.g. ``613196571542028287`` -> cell centroid
3. **Literal pair**          -- ``"<lat>, <lng>"`` split on the first comma

A bare run of digits is always treated as an H3 index, never as a latitude,
so text without a comma can never be read as raw coordinates.

Each attempt returns a ``ParsedInput`` or ``None``; only the final
no-match raises.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Optional

import h3

from .entities import Coordinate, MalformedCoordinate
from .enums import InputFormat

_H3_HEX = re.compile(r"[0-9a-fA-F]{15,16}")
_UINT = re.compile(r"\+?[0-9]+")
_UINT64_MAX = 2**64 - 1
_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class ParsedInput:
    format: InputFormat
    coordinate: Coordinate


def _cell_centroid(cell: str) -> Coordinate:
    lat, lng = h3.cell_to_latlng(cell)
    return Coordinate(lat, lng)


def _try_h3_string(text: str) -> Optional[ParsedInput]:
    if not _H3_HEX.fullmatch(text) or not h3.is_valid_cell(text):
        return None
    return ParsedInput(InputFormat.H3_STRING, _cell_centroid(text))


def _try_h3_integer(text: str) -> Optional[ParsedInput]:
    if not _UINT.fullmatch(text):
        return None
    index = int(text)
    if index > _UINT64_MAX:
        return None
    cell = h3.int_to_str(index)
    if not h3.is_valid_cell(cell):
        return None
    return ParsedInput(InputFormat.H3_INTEGER, _cell_centroid(cell))


def _parse_float(text: str) -> Optional[float]:
    # ASCII decimal only: no "_" separators, no non-ASCII digits.
    if not _FLOAT.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def _try_lat_lng(text: str) -> Optional[ParsedInput]:
    lat_text, comma, lng_text = text.partition(",")
    if not comma:
        return None
    lat = _parse_float(lat_text.strip())
    lng = _parse_float(lng_text.strip())
    if lat is None or lng is None:
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        return None
    return ParsedInput(InputFormat.LAT_LNG, Coordinate(lat, lng))


# Priority order matters: see module docstring.
GRAMMARS: tuple[Callable[[str], Optional[ParsedInput]], ...] = (
    _try_h3_string,
    _try_h3_integer,
    _try_lat_lng,
)


def detect(text: str) -> Optional[ParsedInput]:
    """Return the first grammar match for *text*, or ``None``."""
    for attempt in GRAMMARS:
        parsed = attempt(text)
        if parsed is not None:
            return parsed
    return None


def parse(text: str) -> Coordinate:
    """Parse *text* into a ``Coordinate`` or raise ``MalformedCoordinate``."""
    parsed = detect(text)
    if parsed is None:
        raise MalformedCoordinate(text)
    return parsed.coordinate
