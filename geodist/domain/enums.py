"""Domain enumerations."""

import enum


class InputFormat(str, enum.Enum):
    """Coordinate grammars, listed in the order the parser tries them."""

    H3_STRING = "H3_STRING"
    H3_INTEGER = "H3_INTEGER"
    LAT_LNG = "LAT_LNG"


class Side(str, enum.Enum):
    SOURCE = "src"
    DESTINATION = "dst"
