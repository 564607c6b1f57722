from __future__ import annotations

import threading
from typing import Optional

from .errors import ResolutionCancelled


class CancelToken:
    """
    Shared flag a caller flips to abandon a resolution.

    Checked before every rate-limit wait, before every network dispatch and
    after every provider response. Waiting on the token wakes up as soon as
    it is cancelled.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to timeout seconds; returns True if cancelled meanwhile."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ResolutionCancelled("Route resolution cancelled by caller")


def raise_if_cancelled(cancel: Optional[CancelToken]) -> None:
    if cancel is not None:
        cancel.raise_if_cancelled()
