"""
Purpose: Central configuration for the route cache tiers.
What it does:

Stores all tunable thresholds/caps:

MEMORY_CAPACITY = 100 entries

MEMORY_TTL_S = 900 (15 minutes)

PERSISTENT_TTL_S = 3600 (1 hour)

CLEANUP_INTERVAL_S = 300 (5 minutes)

Rule: No logic here - just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CACHE_PATH = os.path.join(os.path.expanduser("~"), ".cache", "route_resolver", "routes.sqlite3")


@dataclass(frozen=True)
class CachePolicy:
    """
    Central configuration for TieredCache and its stores.
    """

    # --- Volatile tier (in-process LRU) ---
    memory_capacity: int = 100
    memory_ttl_s: float = 15 * 60

    # --- Persistent tier (SQLite) ---
    # Turn off for tests / read-only environments.
    enable_persistent: bool = True
    persistent_path: str = DEFAULT_CACHE_PATH
    persistent_ttl_s: float = 60 * 60

    # --- Sweeper ---
    cleanup_interval_s: float = 5 * 60

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.memory_capacity <= 0:
            raise ValueError("memory_capacity must be > 0")

        if self.memory_ttl_s <= 0 or self.persistent_ttl_s <= 0:
            raise ValueError("cache TTLs must be > 0")

        if self.enable_persistent and not self.persistent_path:
            raise ValueError("persistent_path must be set when the persistent tier is enabled")

        if self.cleanup_interval_s <= 0:
            raise ValueError("cleanup_interval_s must be > 0")


def default_cache_policy() -> CachePolicy:
    """
    Convenience factory for the default policy.
    """
    p = CachePolicy()
    p.validate()
    return p


def cache_policy_from_env() -> CachePolicy:
    defaults = CachePolicy()
    p = CachePolicy(
        memory_capacity=int(os.getenv("ROUTE_CACHE_CAPACITY", defaults.memory_capacity)),
        memory_ttl_s=float(os.getenv("ROUTE_CACHE_MEMORY_TTL_S", defaults.memory_ttl_s)),
        enable_persistent=os.getenv("ROUTE_CACHE_PERSISTENT", "1").lower() not in ("0", "false", "no"),
        persistent_path=os.getenv("ROUTE_CACHE_PATH", defaults.persistent_path),
        persistent_ttl_s=float(os.getenv("ROUTE_CACHE_PERSISTENT_TTL_S", defaults.persistent_ttl_s)),
        cleanup_interval_s=float(os.getenv("ROUTE_CACHE_CLEANUP_S", defaults.cleanup_interval_s)),
    )
    p.validate()
    return p
