"""
Hand-rolled stand-ins for the network, the clock and the providers.
"""
from typing import Any, Callable, Dict, List, Optional

from routing.errors import ProviderError
from routing.models import Coordinate, ProviderName, RouteResult
from routing.providers import RouteProvider


class FakeClock:
    def __init__(self, start: float = 1_000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, headers: Optional[Dict[str, str]] = None):
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """
    Mimics requests.Session.request. `handler(method, url, kwargs)` returns a
    FakeResponse or raises (e.g. requests.exceptions.Timeout).
    """

    def __init__(self, handler: Callable[[str, str, Dict[str, Any]], FakeResponse]):
        self.handler = handler
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        return self.handler(method, url, kwargs)


def route_between(origin: Coordinate, destination: Coordinate, provider: ProviderName = ProviderName.OSRM,
                  distance_m: float = 1000.0, duration_s: float = 60.0, confidence: float = 0.9) -> RouteResult:
    return RouteResult(
        distance_m=distance_m,
        duration_s=duration_s,
        geometry=(origin, destination),
        provider=provider,
        confidence=confidence,
    )


class StubProvider(RouteProvider):
    """
    Provider whose behaviour is scripted: `outcome` is either a ProviderError
    to raise on every call or None to return a route.
    """

    def __init__(self, name: ProviderName, confidence: float = 0.9, outcome: Optional[ProviderError] = None,
                 requests_per_second: Optional[float] = None, distance_m: float = 1000.0):
        self.name = name
        self.confidence = confidence
        self.outcome = outcome
        self.requests_per_second = requests_per_second
        self.distance_m = distance_m
        self.calls: List[tuple] = []

    def route(self, origin, destination, cancel=None):
        self.calls.append((origin, destination))
        if self.outcome is not None:
            raise self.outcome
        return route_between(origin, destination, self.name, distance_m=self.distance_m, confidence=self.confidence)
