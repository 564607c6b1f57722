import math

import pytest

from routing.errors import InvalidInputError
from routing.models import Coordinate
from routing.validation import is_valid_coordinate, validate_coordinates


def test_valid_coordinates():
    assert is_valid_coordinate(Coordinate(48.7758, 9.1829))
    assert is_valid_coordinate(Coordinate(49.0069, 8.4037))
    assert is_valid_coordinate(Coordinate(0, 0))
    assert is_valid_coordinate(Coordinate(-90, -180))
    assert is_valid_coordinate(Coordinate(90, 180))


@pytest.mark.parametrize("lat", [91, -91, 100, -100])
def test_out_of_range_latitude(lat):
    assert not is_valid_coordinate(Coordinate(lat, 0))


@pytest.mark.parametrize("lon", [181, -181, 200, -200])
def test_out_of_range_longitude(lon):
    assert not is_valid_coordinate(Coordinate(0, lon))


@pytest.mark.parametrize("lat, lon", [
    (math.nan, 0),
    (0, math.nan),
    (math.inf, 0),
    (0, math.inf),
    (-math.inf, 0),
    (0, -math.inf),
    (math.nan, math.nan),
])
def test_non_finite_values(lat, lon):
    assert not is_valid_coordinate(Coordinate(lat, lon))


def test_non_numeric_values():
    assert not is_valid_coordinate(Coordinate("48.7", 9.1))
    assert not is_valid_coordinate(Coordinate(None, 9.1))
    assert not is_valid_coordinate(Coordinate(True, 9.1))
    assert not is_valid_coordinate(object())


def test_validate_coordinates_raises_on_first_invalid():
    validate_coordinates(Coordinate(48.7758, 9.1829), Coordinate(49.0069, 8.4037))

    with pytest.raises(InvalidInputError):
        validate_coordinates(Coordinate(48.7758, 9.1829), Coordinate(91, 8.4037))

    # still a ValueError for callers that only know the builtin
    with pytest.raises(ValueError):
        validate_coordinates(Coordinate(-91, -181))
