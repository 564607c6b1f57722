# Contains the base class every routing backend implements.

from abc import ABC, abstractmethod
from typing import Optional

from .cancellation import CancelToken
from .models import Coordinate, ProviderName, RouteResult


class RouteProvider(ABC):
    """
    Abstract Base Class (blueprint) for all routing backends.
    It ensures the resolver can walk the fallback chain without knowing
    which concrete service it is talking to.
    """

    name: ProviderName
    confidence: float

    # None means the provider has no upstream quota and is never throttled.
    requests_per_second: Optional[float] = None

    @abstractmethod
    def route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        cancel: Optional[CancelToken] = None,
    ) -> RouteResult:
        """
        Compute a route or raise a ProviderError subclass.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name.value})"
