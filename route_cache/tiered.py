"""
Purpose: Read-through / write-through composition of cache stores.
What it does:
- Consults stores in priority order (fastest, most volatile first)
- Backfills faster stores when a slower one hits
- Treats every store failure as non-fatal: logged and skipped

Rule: losing the cache must never stop routing. Nothing here raises on
store errors.
"""
from __future__ import annotations

import logging
import threading
from typing import List, Optional, Sequence

from routing.models import RouteResult

from .models import CacheStats
from .stores import CacheStore

logger = logging.getLogger(__name__)


def _backfill_ttl(store: CacheStore, remaining_s: Optional[float]) -> Optional[float]:
    if remaining_s is None:
        return None
    if store.default_ttl_s is None:
        return remaining_s
    return min(remaining_s, store.default_ttl_s)


class TieredCache:
    def __init__(self, stores: Sequence[CacheStore]):
        self.stores: List[CacheStore] = list(stores)
        self._hits = 0
        self._misses = 0
        self._stats_lock = threading.Lock()

    def _available(self, store: CacheStore) -> bool:
        try:
            return store.is_available()
        except Exception as exc:
            logger.warning(f"Cache store {store.name} availability check failed: {exc}")
            return False

    def _record(self, hit: bool) -> None:
        with self._stats_lock:
            if hit:
                self._hits += 1
            else:
                self._misses += 1

    # --- Public API ---

    def lookup(self, key: str) -> Optional[RouteResult]:
        """
        First hit wins. Every earlier available store gets the entry
        written back so the next lookup is served from the fastest tier.
        A backfilled entry never outlives the copy it came from.
        """
        consulted: List[CacheStore] = []

        for store in self.stores:
            if not self._available(store):
                continue

            try:
                result, remaining_s = store.get_with_ttl(key)
            except Exception as exc:
                logger.warning(f"Cache store {store.name} read failed for {key}: {exc}")
                result, remaining_s = None, None

            if result is not None:
                for earlier in consulted:
                    try:
                        earlier.set(key, result, _backfill_ttl(earlier, remaining_s))
                    except Exception as exc:
                        logger.warning(f"Cache backfill into {earlier.name} failed for {key}: {exc}")
                logger.debug(f"Cache hit in {store.name} for {key}")
                self._record(hit=True)
                return result

            consulted.append(store)

        logger.debug(f"Cache miss for {key}")
        self._record(hit=False)
        return None

    def store(self, key: str, result: RouteResult, ttl_s: Optional[float] = None) -> None:
        """
        Best-effort write to every available store.
        """
        for store in self.stores:
            if not self._available(store):
                continue
            try:
                store.set(key, result, ttl_s)
            except Exception as exc:
                logger.warning(f"Failed to cache route in {store.name}: {exc}")

    def clear(self) -> None:
        for store in self.stores:
            if not self._available(store):
                continue
            try:
                store.clear()
            except Exception as exc:
                logger.warning(f"Failed to clear cache in {store.name}: {exc}")

    def cleanup(self) -> int:
        """
        Sweep expired entries from every store that supports it.
        """
        removed = 0
        for store in self.stores:
            if not self._available(store):
                continue
            try:
                removed += store.cleanup()
            except Exception as exc:
                logger.warning(f"Cache cleanup in {store.name} failed: {exc}")
        return removed

    def stats(self) -> CacheStats:
        """
        Hit/miss counters plus the size of the first (volatile) tier.
        """
        size = 0
        max_size = None
        if self.stores:
            primary = self.stores[0]
            try:
                size = primary.size()
                max_size = primary.max_size
            except Exception as exc:
                logger.warning(f"Could not read size of {primary.name}: {exc}")

        with self._stats_lock:
            return CacheStats(hits=self._hits, misses=self._misses, size=size, max_size=max_size)

    def reset_stats(self) -> None:
        with self._stats_lock:
            self._hits = 0
            self._misses = 0
