# Contains the capability interface every cache tier implements.

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from routing.models import RouteResult


class CacheStore(ABC):
    """
    Abstract Base Class (blueprint) for cache tiers.
    TieredCache only ever talks to stores through these methods.
    """

    name: str = "store"
    # None when the store has no default of its own
    default_ttl_s: Optional[float] = None

    @abstractmethod
    def get(self, key: str) -> Optional[RouteResult]:
        """Return the cached result, or None when absent or expired."""
        pass

    @abstractmethod
    def set(self, key: str, result: RouteResult, ttl_s: Optional[float] = None) -> None:
        """Store a result; ttl_s None means the store's default TTL."""
        pass

    def get_with_ttl(self, key: str) -> Tuple[Optional[RouteResult], Optional[float]]:
        """
        Result plus seconds left before it expires. Stores that cannot tell
        report None for the TTL.
        """
        return self.get(key), None

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """False when the underlying storage engine can't be used."""
        pass

    def cleanup(self) -> int:
        """Drop expired entries and return how many were removed."""
        return 0

    def size(self) -> int:
        return 0

    @property
    def max_size(self) -> Optional[int]:
        return None
