from __future__ import annotations

import logging
import threading
from typing import Optional

from .tiered import TieredCache

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_S = 5 * 60


class CacheSweeper:
    """
    Background heartbeat that periodically drops expired cache entries.
    Runs on a daemon thread so it never keeps the process alive.
    """

    def __init__(self, cache: TieredCache, interval_s: float = DEFAULT_INTERVAL_S):
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self.cache = cache
        self.interval_s = interval_s
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def run_once(self) -> int:
        removed = self.cache.cleanup()
        if removed > 0:
            logger.debug(f"Cleaned up {removed} expired cache entries")
        return removed

    def _loop(self) -> None:
        while not self._stop.wait(self.interval_s):
            self.run_once()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="route-cache-sweeper", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
