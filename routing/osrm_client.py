#Purpose: The OSRM "adapter/client" (provider A, primary).
#Sole responsibility: talk to OSRM via HTTP and return a normalized RouteResult.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat)
#URL construction (/route/v1/{profile}/{coordinates})
#response validation (code, empty route list)
#parsing response JSON into RouteResult
#It should not contain fallback rules or caching.

import logging
from typing import Any, Dict, List, Optional

import requests

from .cancellation import CancelToken
from .errors import NoRouteFoundError, UnknownProviderError
from .http import fetch_json
from .models import Coordinate, ProviderName, RouteResult, ensure_geometry
from .policy import RoutingPolicy, default_policy
from .providers import RouteProvider
from .validation import validate_coordinates

logger = logging.getLogger(__name__)

# OSRM codes that mean "the request was fine, there is just no way through"
NO_ROUTE_CODES = {"NoRoute", "NoSegment"}


class OSRMClient(RouteProvider):
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Convert internal Coordinate(lat, lon) -> OSRM (lon,lat)
    - Return normalized RouteResult (meters, seconds)

    """
    name = ProviderName.OSRM
    confidence = 0.9

    def __init__(self, policy: Optional[RoutingPolicy] = None, session: Optional[requests.Session] = None):
        self.policy = policy or default_policy()
        self.base_url = self.policy.osrm_base_url.rstrip("/")
        self.profile = self.policy.osrm_profile #the mode of transportation (driving, walking, cycling)
        self.timeout = self.policy.request_timeout_s #the time to wait for a response from OSRM before giving up
        self.requests_per_second = self.policy.osrm_requests_per_second
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", self.policy.user_agent)

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

    #----------------
    # Internal helper methods for coordinate formatting and parsing
    #----------------
    def format_coordinates(self, coords: List[Coordinate]) -> str:
        """Convert list of Coordinate to OSRM format 'lon,lat;lon,lat;...'"""
        return ';'.join("{},{}".format(*coord.as_lonlat()) for coord in coords)

    def route_url(self, origin: Coordinate, destination: Coordinate) -> str:
        coordinates = self.format_coordinates([origin, destination])
        return f"{self.base_url}/route/v1/{self.profile}/{coordinates}"

    def _parse_route(self, data: Dict[str, Any], origin: Coordinate, destination: Coordinate) -> RouteResult:
        try:
            code = data.get("code", "Ok")
            if code in NO_ROUTE_CODES:
                raise NoRouteFoundError(self.name.value, f"OSRM: {data.get('message', code)}")
            if code != "Ok":
                raise UnknownProviderError(self.name.value, message=f"OSRM error: {data.get('message', code)}")

            routes = data.get("routes") or []
            if not routes:
                raise NoRouteFoundError(self.name.value)

            route = routes[0] #take the first route (OSRM may return alternatives)

            #geojson geometry comes back as [lon, lat] pairs
            raw_points = (route.get("geometry") or {}).get("coordinates") or []
            points = [Coordinate(lat=float(lat), lon=float(lon)) for lon, lat in raw_points]

            return RouteResult(
                distance_m=float(route["distance"]),
                duration_s=float(route["duration"]),
                geometry=ensure_geometry(points, origin, destination),
                provider=self.name,
                confidence=self.confidence,
            )
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
            raise UnknownProviderError(self.name.value, exc, "OSRM returned an unexpected route shape") from exc

    #----------------
    # Public methods
    #----------------
    def route(self, origin: Coordinate, destination: Coordinate, cancel: Optional[CancelToken] = None) -> RouteResult:
        """
        calls the OSRM /route endpoint with the given coordinates and
        returns a RouteResult with full geometry

        Raises:
            RateLimitedError on HTTP 429
            TransportBlockedError on timeout / connection failure
            NoRouteFoundError when OSRM has no route
        """
        validate_coordinates(origin, destination)

        data = fetch_json(
            self.session,
            "GET",
            self.route_url(origin, destination),
            provider=self.name.value,
            timeout=self.timeout,
            cancel=cancel,
            default_retry_after_s=self.policy.default_retry_after_s,
            params={
                "overview": "full", # full geometry for map display
                "geometries": "geojson",
            },
        )

        return self._parse_route(data, origin, destination)
