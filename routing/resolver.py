"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Validates the query, serves it from the tiered cache when possible, otherwise
walks the provider chain (OSRM -> Valhalla -> haversine), each attempt gated
by that provider's rate limiter, and writes the first success back to the cache.

States:
  Validating -> CacheLookup -> ProviderAttempt(i) -> Success | next provider -> ... -> RoutingFailed

Provider errors never reach the caller; they become fallback decisions and are
exposed through `diagnostics` and the logs. Only InvalidInputError,
ResolutionCancelled and the (unreachable) RoutingFailedError propagate.
"""
from __future__ import annotations

import logging
import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Mapping, Optional, Sequence

from route_cache.keys import DEFAULT_PRECISION, make_cache_key
from route_cache.tiered import TieredCache

from .cancellation import CancelToken, raise_if_cancelled
from .errors import ProviderError, RateLimitedError, RoutingError, RoutingFailedError, UnknownProviderError
from .models import Coordinate, ProviderName, RouteResult
from .providers import RouteProvider
from .rate_limiter import RateLimiter
from .validation import validate_coordinates

logger = logging.getLogger(__name__)


class RouteResolver:
    """
    Composes validator, cache, rate limiters and the ordered provider chain.

    `limiters` maps provider name -> RateLimiter. Providers without an entry
    get one built from their own `requests_per_second`; providers that
    declare none (the haversine fallback) are called directly.
    """

    def __init__(
        self,
        providers: Sequence[RouteProvider],
        cache: TieredCache,
        limiters: Optional[Mapping[str, RateLimiter]] = None,
        key_precision: int = DEFAULT_PRECISION,
    ):
        if not providers:
            raise ValueError("at least one provider is required")

        self.providers: List[RouteProvider] = list(providers)
        self.cache = cache
        self.key_precision = key_precision
        self.limiters: Dict[str, Optional[RateLimiter]] = {}

        limiters = dict(limiters or {})
        for provider in self.providers:
            key = provider.name.value
            if key in limiters:
                self.limiters[key] = limiters[key]
            elif provider.requests_per_second:
                self.limiters[key] = RateLimiter(provider.requests_per_second, name=key)
            else:
                self.limiters[key] = None

        self._provider_counts: Counter = Counter()
        self._stats_lock = threading.Lock()

    # --- helpers ---

    def cache_key(self, origin: Coordinate, destination: Coordinate) -> str:
        return make_cache_key(origin, destination, precision=self.key_precision)

    def _count(self, provider: ProviderName) -> None:
        with self._stats_lock:
            self._provider_counts[provider.value] += 1

    def _attempt(self, provider: RouteProvider, origin: Coordinate, destination: Coordinate,
                 cancel: Optional[CancelToken]) -> RouteResult:
        limiter = self.limiters.get(provider.name.value)
        if limiter is None:
            raise_if_cancelled(cancel)
            return provider.route(origin, destination, cancel=cancel)
        return limiter.throttle(provider.route, origin, destination, cancel=cancel)

    # --- Public API ---

    def resolve_route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        *,
        cancel: Optional[CancelToken] = None,
        diagnostics: Optional[List[ProviderError]] = None,
    ) -> RouteResult:
        """
        Resolve a route between two points.

        Args:
            origin / destination: Coordinate(lat, lon)
            cancel: optional token; once cancelled nothing else is dispatched
                    and nothing is written to the cache
            diagnostics: optional list that receives every provider error
                         swallowed during fallback

        Returns:
            RouteResult tagged with the serving provider, or `cache` on a hit.
        """
        # 1. Validating: nothing touches cache or network before this passes
        validate_coordinates(origin, destination)
        raise_if_cancelled(cancel)

        # 2. CacheLookup
        key = self.cache_key(origin, destination)
        cached = self.cache.lookup(key)
        if cached is not None:
            self._count(ProviderName.CACHE)
            return cached.tagged(ProviderName.CACHE)

        # 3. ProviderAttempt(i)
        errors: List[ProviderError] = []
        for provider in self.providers:
            try:
                result = self._attempt(provider, origin, destination, cancel)
            except RateLimitedError as exc:
                # not waited out inline: latency stays bounded, next provider instead
                logger.warning(f"{provider.name.value} rate limited (retry after {exc.retry_after_s:g}s), falling back")
                errors.append(exc)
                continue
            except ProviderError as exc:
                logger.warning(f"Provider {provider.name.value} failed: {exc}")
                errors.append(exc)
                continue
            except RoutingError:
                # invalid input and cancellation belong to the caller
                raise
            except Exception as exc:
                wrapped = UnknownProviderError(provider.name.value, exc)
                logger.warning(f"Provider {provider.name.value} crashed: {exc!r}")
                errors.append(wrapped)
                continue

            # caller may have given up while the provider was answering
            raise_if_cancelled(cancel)

            self.cache.store(key, result)
            self._count(result.provider)
            if diagnostics is not None:
                diagnostics.extend(errors)
            logger.info(f"Route {key} served by {result.provider.value}")
            return result

        # 4. TerminalFailure: unreachable while the haversine provider closes the chain
        if diagnostics is not None:
            diagnostics.extend(errors)
        logger.error(f"All routing providers failed for {key}")
        raise RoutingFailedError(errors)

    def resolve_many(
        self,
        origin: Coordinate,
        destinations: Sequence[Coordinate],
        *,
        max_workers: int = 4,
        cancel: Optional[CancelToken] = None,
    ) -> List[RouteResult]:
        """
        Fan out one resolution per destination. Results keep input order.
        Every coordinate is validated up front so a bad destination fails the
        whole call before any request is sent.
        """
        validate_coordinates(origin, *destinations)
        if not destinations:
            return []

        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
            futures = [
                pool.submit(self.resolve_route, origin, destination, cancel=cancel)
                for destination in destinations
            ]
            return [future.result() for future in futures]

    def clear_cache(self) -> None:
        self.cache.clear()

    def provider_stats(self) -> Dict[str, int]:
        """How many resolutions each provider (and the cache) has served."""
        with self._stats_lock:
            return {name.value: self._provider_counts.get(name.value, 0) for name in ProviderName}

    def reset_stats(self) -> None:
        with self._stats_lock:
            self._provider_counts.clear()
        self.cache.reset_stats()
