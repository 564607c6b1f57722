"""
Purpose: Domain models for the routing capability.
What it does:
- Defines core data structures:
- Coordinate (lat, lon)
- RouteResult (distance, duration, geometry, provider, confidence)

Defines enums/constants:
- ProviderName = OSRM | VALHALLA | HAVERSINE | CACHE

Rule: No HTTP calls, no cache logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple

LatLon = Tuple[float, float]


class ProviderName(str, Enum):
    """
    Identity of whoever served a RouteResult.
    CACHE is only ever stamped by the resolver on a cache hit.
    """
    OSRM = "osrm"
    VALHALLA = "valhalla"
    HAVERSINE = "haversine"
    CACHE = "cache"


@dataclass(frozen=True)
class Coordinate:
    """
    A point on the globe in (lat, lon) order.
    Range checks live in routing.validation so a Coordinate can carry bad
    input far enough to be rejected with InvalidInputError.
    """
    lat: float
    lon: float

    @classmethod
    def from_latlon(cls, latlon: LatLon) -> Coordinate:
        lat, lon = latlon
        return cls(lat=lat, lon=lon)

    def as_lonlat(self) -> Tuple[float, float]:
        """OSRM / GeoJSON order."""
        return (self.lon, self.lat)


@dataclass(frozen=True)
class RouteResult:
    """
    Output of a provider (or of the cache).

    distance_m: meters, >= 0
    duration_s: seconds, >= 0
    geometry: polyline from origin to destination, at least 2 points
    confidence: provider-intrinsic score in (0, 1]
    """
    distance_m: float
    duration_s: float
    geometry: Tuple[Coordinate, ...]
    provider: ProviderName
    confidence: float

    def __post_init__(self) -> None:
        # accept any sequence for geometry but store an immutable tuple
        object.__setattr__(self, "geometry", tuple(self.geometry))
        object.__setattr__(self, "provider", ProviderName(self.provider))

        if self.distance_m < 0:
            raise ValueError("distance_m must be >= 0")
        if self.duration_s < 0:
            raise ValueError("duration_s must be >= 0")
        if len(self.geometry) < 2:
            raise ValueError("geometry needs at least 2 points")
        if not 0 < self.confidence <= 1:
            raise ValueError("confidence must be in (0, 1]")

    @property
    def distance_km(self) -> float:
        return self.distance_m / 1000.0

    def tagged(self, provider: ProviderName) -> RouteResult:
        return replace(self, provider=provider)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly shape used by the persistent cache."""
        return {
            "distance_m": self.distance_m,
            "duration_s": self.duration_s,
            "geometry": [[point.lat, point.lon] for point in self.geometry],
            "provider": self.provider.value,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RouteResult:
        return cls(
            distance_m=float(data["distance_m"]),
            duration_s=float(data["duration_s"]),
            geometry=tuple(Coordinate(lat=float(lat), lon=float(lon)) for lat, lon in data["geometry"]),
            provider=ProviderName(data["provider"]),
            confidence=float(data["confidence"]),
        )


def straight_line(origin: Coordinate, destination: Coordinate) -> Tuple[Coordinate, Coordinate]:
    """Two-point geometry used when a provider gives us nothing better."""
    return (origin, destination)


def ensure_geometry(points: Sequence[Coordinate], origin: Coordinate, destination: Coordinate) -> List[Coordinate]:
    """
    Providers sometimes return a single snapped point or no shape at all.
    Fall back to the straight segment so RouteResult stays valid.
    """
    if len(points) >= 2:
        return list(points)
    return list(straight_line(origin, destination))
