#Purpose: wire the default provider chain, cache tiers and limiters together.
#Kept out of routing/__init__ so importing the package never opens the
#SQLite cache file.

from typing import Optional

import requests

from route_cache import CachePolicy, build_tiered_cache, default_cache_policy

from .haversine import HaversineProvider
from .osrm_client import OSRMClient
from .policy import RoutingPolicy, default_policy
from .rate_limiter import RateLimiter
from .resolver import RouteResolver
from .valhalla_client import ValhallaClient


def build_default_resolver(
    policy: Optional[RoutingPolicy] = None,
    cache_policy: Optional[CachePolicy] = None,
    session: Optional[requests.Session] = None,
) -> RouteResolver:
    """
    OSRM -> Valhalla -> haversine, memory -> SQLite.
    """
    policy = policy or default_policy()
    cache_policy = cache_policy or default_cache_policy()
    session = session or requests.Session()

    osrm = OSRMClient(policy, session=session)
    valhalla = ValhallaClient(policy, session=session)
    haversine = HaversineProvider(speed_kmh=policy.fallback_speed_kmh)

    limiters = {
        osrm.name.value: RateLimiter(policy.osrm_requests_per_second, name=osrm.name.value),
        valhalla.name.value: RateLimiter(policy.valhalla_requests_per_second, name=valhalla.name.value),
    }

    return RouteResolver(
        providers=[osrm, valhalla, haversine],
        cache=build_tiered_cache(cache_policy),
        limiters=limiters,
        key_precision=policy.key_precision,
    )
