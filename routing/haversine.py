#Purpose: Deterministic last-resort provider (provider C).
#Great-circle distance on a sphere plus a fixed average speed.
#No network, no quota: it only fails on invalid input, which the resolver
#has already filtered, so the fallback chain always terminates here.

import math
from typing import Optional

from .cancellation import CancelToken
from .models import Coordinate, ProviderName, RouteResult, straight_line
from .providers import RouteProvider
from .validation import validate_coordinates

EARTH_RADIUS_M = 6_371_000
DEFAULT_SPEED_KMH = 50.0


def haversine_distance(origin: Coordinate, destination: Coordinate) -> float:
    """Calculate the great circle distance between two points in meters."""
    lat1_rad = math.radians(origin.lat)
    lat2_rad = math.radians(destination.lat)
    delta_lat = math.radians(destination.lat - origin.lat)
    delta_lon = math.radians(destination.lon - origin.lon)
    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2)
    a = min(1.0, a)  # rounding can push near-antipodal points just past 1
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


class HaversineProvider(RouteProvider):
    name = ProviderName.HAVERSINE
    confidence = 0.5

    def __init__(self, speed_kmh: float = DEFAULT_SPEED_KMH):
        if speed_kmh <= 0:
            raise ValueError("speed_kmh must be > 0")
        self.speed_kmh = speed_kmh

    def route(self, origin: Coordinate, destination: Coordinate, cancel: Optional[CancelToken] = None) -> RouteResult:
        validate_coordinates(origin, destination)

        distance_m = haversine_distance(origin, destination)
        duration_s = (distance_m / 1000.0) / self.speed_kmh * 3600

        return RouteResult(
            distance_m=distance_m,
            duration_s=duration_s,
            geometry=straight_line(origin, destination),
            provider=self.name,
            confidence=self.confidence,
        )
