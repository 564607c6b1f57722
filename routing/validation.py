#Purpose: Coordinate validation.
#Pure predicates, no side effects. Every provider and the resolver go through here
#before touching the cache or the network.

import math
from numbers import Real

from .errors import InvalidInputError
from .models import Coordinate


def _is_finite_number(value) -> bool:
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def is_valid_coordinate(coord) -> bool:
    """
    True when coord has finite lat in [-90, 90] and lon in [-180, 180].
    """
    lat = getattr(coord, "lat", None)
    lon = getattr(coord, "lon", None)

    if not _is_finite_number(lat) or not _is_finite_number(lon):
        return False

    return -90 <= lat <= 90 and -180 <= lon <= 180


def validate_coordinates(*coords: Coordinate) -> None:
    """
    Raise InvalidInputError on the first invalid coordinate.
    """
    for coord in coords:
        if not is_valid_coordinate(coord):
            raise InvalidInputError(f"Invalid coordinates provided: {coord!r}")
