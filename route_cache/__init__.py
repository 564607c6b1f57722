#Marks route_cache as a package.
#Re-exports the cache tiers and the tiered lookup so callers don't need
#to know internal file names.
#No business logic.

from .keys import make_cache_key
from .memory_store import MemoryCacheStore
from .models import CacheEntry, CacheStats
from .policy import CachePolicy, cache_policy_from_env, default_cache_policy
from .sqlite_store import SQLiteCacheStore
from .stores import CacheStore
from .sweeper import CacheSweeper
from .tiered import TieredCache


def build_tiered_cache(policy: CachePolicy = None) -> TieredCache:
    """
    Memory first, then SQLite (when enabled).
    """
    policy = policy or default_cache_policy()
    stores = [MemoryCacheStore(capacity=policy.memory_capacity, default_ttl_s=policy.memory_ttl_s)]
    if policy.enable_persistent:
        stores.append(SQLiteCacheStore(policy.persistent_path, default_ttl_s=policy.persistent_ttl_s))
    return TieredCache(stores)


__all__ = [
    "CacheEntry",
    "CachePolicy",
    "CacheStats",
    "CacheStore",
    "CacheSweeper",
    "MemoryCacheStore",
    "SQLiteCacheStore",
    "TieredCache",
    "build_tiered_cache",
    "cache_policy_from_env",
    "default_cache_policy",
    "make_cache_key",
]
