#Purpose: The Valhalla adapter (provider B, secondary, traffic-aware costing).
#Sends a JSON body to /route and normalizes the trip into a RouteResult.
#Valhalla reports length in kilometers, converted to meters here.

import logging
from typing import Any, Dict, List, Optional

import requests

from .cancellation import CancelToken
from .errors import NoRouteFoundError, UnknownProviderError
from .http import fetch_json
from .models import Coordinate, ProviderName, RouteResult, ensure_geometry
from .policy import RoutingPolicy, default_policy
from .polyline import decode_polyline
from .providers import RouteProvider
from .validation import validate_coordinates

logger = logging.getLogger(__name__)

METERS_PER_KM = 1000.0


class ValhallaClient(RouteProvider):
    """The adapter for the Valhalla routing API."""
    name = ProviderName.VALHALLA
    confidence = 0.8

    def __init__(self, policy: Optional[RoutingPolicy] = None, session: Optional[requests.Session] = None):
        self.policy = policy or default_policy()
        self.base_url = self.policy.valhalla_base_url.rstrip("/")
        self.costing = self.policy.valhalla_costing
        self.timeout = self.policy.request_timeout_s
        self.requests_per_second = self.policy.valhalla_requests_per_second
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", self.policy.user_agent)

        if not self.base_url:
            raise ValueError("Valhalla base URL not set. Please set VALHALLA_BASE_URL in the .env file.")

    def build_request(self, origin: Coordinate, destination: Coordinate) -> Dict[str, Any]:
        return {
            "locations": [
                {"lat": origin.lat, "lon": origin.lon},
                {"lat": destination.lat, "lon": destination.lon},
            ],
            "costing": self.costing,
            "directions_options": {"units": "kilometers"},
        }

    @staticmethod
    def _trip_totals(trip: Dict[str, Any], legs: List[Dict[str, Any]]):
        """(length_km, time_s) from the trip summary, or summed over legs."""
        summary = trip.get("summary")
        if summary:
            return float(summary["length"]), float(summary["time"])

        length_km = sum(float(leg["summary"]["length"]) for leg in legs)
        time_s = sum(float(leg["summary"]["time"]) for leg in legs)
        return length_km, time_s

    def _parse_trip(self, data: Dict[str, Any], origin: Coordinate, destination: Coordinate) -> RouteResult:
        try:
            trip = data.get("trip")
            legs = (trip or {}).get("legs") or []
            if not trip or not legs:
                raise NoRouteFoundError(self.name.value)

            length_km, time_s = self._trip_totals(trip, legs)

            points: List[Coordinate] = []
            for leg in legs:
                shape = leg.get("shape")
                if not shape:
                    continue
                decoded = decode_polyline(shape)
                # consecutive legs share their joining point
                if points and decoded and decoded[0] == points[-1]:
                    decoded = decoded[1:]
                points.extend(decoded)

            return RouteResult(
                distance_m=length_km * METERS_PER_KM,
                duration_s=time_s,
                geometry=ensure_geometry(points, origin, destination),
                provider=self.name,
                confidence=self.confidence,
            )
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
            raise UnknownProviderError(self.name.value, exc, "Valhalla returned an unexpected trip shape") from exc

    def route(self, origin: Coordinate, destination: Coordinate, cancel: Optional[CancelToken] = None) -> RouteResult:
        validate_coordinates(origin, destination)

        data = fetch_json(
            self.session,
            "POST",
            f"{self.base_url}/route",
            provider=self.name.value,
            timeout=self.timeout,
            cancel=cancel,
            default_retry_after_s=self.policy.default_retry_after_s,
            json=self.build_request(origin, destination),
        )

        return self._parse_trip(data, origin, destination)
