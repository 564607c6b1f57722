"""
Volatile in-process tier: a bounded LRU map with per-entry TTL.

Expired entries are dropped lazily on read or in bulk by cleanup().
When the map is full the least recently used entry is evicted.
"""
from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from routing.models import RouteResult

from .models import CacheEntry
from .stores import CacheStore

DEFAULT_CAPACITY = 100
DEFAULT_TTL_S = 15 * 60


class MemoryCacheStore(CacheStore):
    name = "memory"

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        default_ttl_s: float = DEFAULT_TTL_S,
        clock: Callable[[], float] = time.time,
    ):
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        if default_ttl_s <= 0:
            raise ValueError("default_ttl_s must be > 0")

        self.capacity = capacity
        self.default_ttl_s = default_ttl_s
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()

    def get_with_ttl(self, key: str) -> Tuple[Optional[RouteResult], Optional[float]]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None, None

            now = self._clock()
            if entry.is_expired(now):
                del self._entries[key]
                return None, None

            # most recently used goes to the end
            self._entries.move_to_end(key)
            return entry.result, entry.remaining_s(now)

    def get(self, key: str) -> Optional[RouteResult]:
        return self.get_with_ttl(key)[0]

    def set(self, key: str, result: RouteResult, ttl_s: Optional[float] = None) -> None:
        entry = CacheEntry(
            key=key,
            result=result,
            created_at=self._clock(),
            ttl_s=ttl_s if ttl_s is not None else self.default_ttl_s,
        )
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            while len(self._entries) >= self.capacity:
                self._entries.popitem(last=False)
            self._entries[key] = entry

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def is_available(self) -> bool:
        return True

    def cleanup(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def max_size(self) -> Optional[int]:
        return self.capacity
