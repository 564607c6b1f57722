"""
Purpose: Error taxonomy for route resolution.

The resolver decides between "surface to caller" and "fall back to the next
provider" purely on the exception type:

- InvalidInputError        caller error, raised before any cache/network access
- RateLimitedError         provider said 429, fall back immediately
- TransportBlockedError    timeout / connection failure, fall back
- NoRouteFoundError        provider answered but has no route, fall back
- UnknownProviderError     anything else a provider did wrong, fall back
- RoutingFailedError       every provider failed (unreachable with the haversine fallback)
- ResolutionCancelled      caller abandoned the resolution
"""
from __future__ import annotations

from typing import List, Optional, Sequence


class RoutingError(Exception):
    """Base class for everything the routing engine raises."""
    pass


class InvalidInputError(RoutingError, ValueError):
    """Raised when a coordinate is non-finite or out of range."""

    def __init__(self, message: str = "Invalid coordinates provided"):
        super().__init__(message)


class ProviderError(RoutingError):
    """A single provider failed. Never surfaced to callers of resolve_route."""

    def __init__(self, provider: str, message: Optional[str] = None):
        self.provider = str(provider)
        super().__init__(message or f"{self.provider} failed")


class RateLimitedError(ProviderError):
    def __init__(self, provider: str, retry_after_s: float = 60.0):
        self.retry_after_s = retry_after_s
        super().__init__(provider, f"Rate limit exceeded for {provider} (retry after {retry_after_s:g}s)")


class TransportBlockedError(ProviderError):
    def __init__(self, provider: str, message: Optional[str] = None):
        super().__init__(provider, message or f"Transport to {provider} blocked or timed out")


class NoRouteFoundError(ProviderError):
    def __init__(self, provider: str, message: Optional[str] = None):
        super().__init__(provider, message or f"{provider} found no route")


class UnknownProviderError(ProviderError):
    def __init__(self, provider: str, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.cause = cause
        super().__init__(provider, message or f"{provider} failed: {cause!r}")


class RoutingFailedError(RoutingError):
    """Aggregate raised when the provider chain runs out."""

    def __init__(self, errors: Sequence[ProviderError]):
        self.errors: List[ProviderError] = list(errors)
        summary = "; ".join(str(error) for error in self.errors) or "no providers configured"
        super().__init__(f"All routing providers failed: {summary}")


class ResolutionCancelled(RoutingError):
    """The caller cancelled the resolution while it was in flight."""
    pass
