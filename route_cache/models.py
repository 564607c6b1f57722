"""
Purpose: Data structures owned by the cache stores.
What it does:
- CacheEntry (key, result, created_at, ttl_s)
- CacheStats (hits, misses, hit_rate, size, max_size)

Rule: No storage logic here. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from routing.models import RouteResult


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached RouteResult. Owned by the store that created it.
    created_at is epoch seconds so persistent entries survive restarts.
    """
    key: str
    result: RouteResult
    created_at: float
    ttl_s: float

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl_s

    def remaining_s(self, now: float) -> float:
        return max(0.0, self.created_at + self.ttl_s - now)


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int
    max_size: Optional[int]

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0
