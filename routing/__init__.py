#Marks routing as a package.
#Re-exports clean public APIs (e.g., RouteResolver, OSRMClient, Coordinate)
#so other modules import from routing without knowing internal file names.
#No business logic.
#build_default_resolver lives in routing.factory (it opens the cache file).

from .models import Coordinate, ProviderName, RouteResult
from .errors import (
    InvalidInputError,
    NoRouteFoundError,
    ProviderError,
    RateLimitedError,
    ResolutionCancelled,
    RoutingError,
    RoutingFailedError,
    TransportBlockedError,
    UnknownProviderError,
)
from .cancellation import CancelToken
from .validation import is_valid_coordinate, validate_coordinates
from .rate_limiter import RateLimiter
from .polyline import decode_polyline
from .providers import RouteProvider
from .osrm_client import OSRMClient
from .valhalla_client import ValhallaClient
from .haversine import HaversineProvider, haversine_distance
from .resolver import RouteResolver

__all__ = [
           "CancelToken",
           "Coordinate",
           "HaversineProvider",
           "InvalidInputError",
           "NoRouteFoundError",
           "OSRMClient",
           "ProviderError",
           "ProviderName",
           "RateLimitedError",
           "RateLimiter",
           "ResolutionCancelled",
           "RouteProvider",
           "RouteResolver",
           "RouteResult",
           "RoutingError",
           "RoutingFailedError",
           "TransportBlockedError",
           "UnknownProviderError",
           "ValhallaClient",
           "decode_polyline",
           "haversine_distance",
           "is_valid_coordinate",
           "validate_coordinates",
             ]
