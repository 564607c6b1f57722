"""
Purpose: Per-provider request throttle.

Upstream services enforce quotas (the public OSRM and Valhalla demo servers
allow roughly 1 request/second). One RateLimiter is owned per provider and
injected into the resolver; concurrent resolutions against the same provider
queue behind each other's reserved slot.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Tuple, TypeVar

from .cancellation import CancelToken

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RateLimiter:
    """
    Delay each call until `interval_s = 1 / requests_per_second` has passed
    since the previous dispatch.

    The read-last / compute-wait / reserve-slot step runs under a lock so two
    threads can never both compute a zero wait.
    """

    def __init__(
        self,
        requests_per_second: float,
        *,
        name: str = "provider",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be > 0")

        self.name = name
        self.interval_s = 1.0 / requests_per_second
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_dispatch: Optional[float] = None

    def _reserve(self) -> Tuple[float, float, Optional[float]]:
        """
        Claim the next dispatch slot.
        Returns (wait, slot, previous slot) so an unused claim can be handed back.
        """
        with self._lock:
            now = self._clock()
            previous = self._last_dispatch
            if previous is None:
                wait = 0.0
            else:
                wait = max(0.0, previous + self.interval_s - now)
            self._last_dispatch = now + wait
            return wait, self._last_dispatch, previous

    def _release(self, slot: float, previous: Optional[float]) -> None:
        with self._lock:
            # a later caller already queued behind this slot, leave it booked
            if self._last_dispatch == slot:
                self._last_dispatch = previous

    def throttle(self, operation: Callable[..., T], *args, cancel: Optional[CancelToken] = None, **kwargs) -> T:
        if cancel is not None:
            cancel.raise_if_cancelled()

        wait, slot, previous = self._reserve()
        if wait > 0:
            logger.debug(f"{self.name}: waiting {wait:.3f}s for rate limit slot")
            if cancel is not None:
                # wakes early if the caller gives up
                cancel.wait(wait)
            else:
                self._sleep(wait)

        if cancel is not None and cancel.cancelled:
            self._release(slot, previous)
            cancel.raise_if_cancelled()

        return operation(*args, **kwargs)
