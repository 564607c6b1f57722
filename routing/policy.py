"""
Purpose: Central configuration for route resolution (single source of truth).
What it does:

Stores all tunable endpoints/limits:

OSRM_BASE_URL = https://router.project-osrm.org

VALHALLA_BASE_URL = https://valhalla1.openstreetmap.de

REQUESTS_PER_SECOND = 1 per provider

REQUEST_TIMEOUT_S = 8

KEY_PRECISION = 4 decimals (~11 m)

Rule: No logic here - just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Read overrides from .env, e.g.
# OSRM_BASE_URL=http://localhost:5000
load_dotenv()


@dataclass(frozen=True)
class RoutingPolicy:
    """
    Central configuration for the provider chain.

    Notes:
    - requests_per_second is enforced per provider by routing.rate_limiter.
    - request_timeout_s is a hard deadline per HTTP call; exceeding it counts
      as TransportBlocked and the resolver falls back.
    """

    # --- Provider A (OSRM, GET with coordinates in the path) ---
    osrm_base_url: str = "https://router.project-osrm.org"
    osrm_profile: str = "driving"
    osrm_requests_per_second: float = 1.0

    # --- Provider B (Valhalla, POST with JSON body) ---
    valhalla_base_url: str = "https://valhalla1.openstreetmap.de"
    valhalla_costing: str = "auto"
    valhalla_requests_per_second: float = 1.0

    # --- Network ---
    request_timeout_s: float = 8.0
    user_agent: str = "route-resolver/0.1"

    # Used when a 429 carries no Retry-After header.
    default_retry_after_s: float = 60.0

    # --- Provider C (haversine) ---
    fallback_speed_kmh: float = 50.0

    # --- Cache keys ---
    # 4 decimals is roughly 11 m at the equator.
    key_precision: int = 4

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if not self.osrm_base_url or not self.valhalla_base_url:
            raise ValueError("provider base URLs must be set")

        if self.osrm_requests_per_second <= 0 or self.valhalla_requests_per_second <= 0:
            raise ValueError("requests_per_second must be > 0")

        if self.request_timeout_s <= 0:
            raise ValueError("request_timeout_s must be > 0")

        if self.default_retry_after_s < 0:
            raise ValueError("default_retry_after_s must be >= 0")

        if self.fallback_speed_kmh <= 0:
            raise ValueError("fallback_speed_kmh must be > 0")

        if self.key_precision < 0:
            raise ValueError("key_precision must be >= 0")


def default_policy() -> RoutingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = RoutingPolicy()
    p.validate()
    return p


def policy_from_env() -> RoutingPolicy:
    """
    Build a policy from environment variables, keeping defaults for anything unset.
    """
    defaults = RoutingPolicy()
    p = RoutingPolicy(
        osrm_base_url=os.getenv("OSRM_BASE_URL", defaults.osrm_base_url).rstrip("/"),
        osrm_profile=os.getenv("OSRM_PROFILE", defaults.osrm_profile),
        osrm_requests_per_second=float(os.getenv("OSRM_RPS", defaults.osrm_requests_per_second)),
        valhalla_base_url=os.getenv("VALHALLA_BASE_URL", defaults.valhalla_base_url).rstrip("/"),
        valhalla_costing=os.getenv("VALHALLA_COSTING", defaults.valhalla_costing),
        valhalla_requests_per_second=float(os.getenv("VALHALLA_RPS", defaults.valhalla_requests_per_second)),
        request_timeout_s=float(os.getenv("ROUTING_TIMEOUT_S", defaults.request_timeout_s)),
        key_precision=int(os.getenv("ROUTE_CACHE_KEY_PRECISION", defaults.key_precision)),
    )
    p.validate()
    return p
