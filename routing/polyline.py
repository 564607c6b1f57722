"""
Encoded polyline decoding (the Google / Valhalla format).

Thin wrapper over the `polyline` package that hands back Coordinates.
Latitude comes first in every decoded pair.
"""
from typing import List

import polyline

from .models import Coordinate


def decode_polyline(encoded: str, precision: int = 5) -> List[Coordinate]:
    """
    Decode an encoded polyline into Coordinates.
    An empty string decodes to an empty list.
    """
    if not encoded:
        return []

    try:
        pairs = polyline.decode(encoded, precision)
    except IndexError as exc:
        # the last value ran off the end of the string
        raise ValueError("Truncated polyline") from exc

    return [Coordinate.from_latlon(pair) for pair in pairs]
