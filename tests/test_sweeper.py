import time

import pytest

from route_cache.memory_store import MemoryCacheStore
from route_cache.sweeper import CacheSweeper
from route_cache.tiered import TieredCache
from routing.models import Coordinate
from tests.fakes import FakeClock, route_between


@pytest.fixture
def expired_cache():
    clock = FakeClock()
    memory = MemoryCacheStore(clock=clock)
    route = route_between(Coordinate(48.7758, 9.1829), Coordinate(49.0069, 8.4037))
    memory.set("a", route, ttl_s=1)
    memory.set("b", route, ttl_s=1)
    memory.set("keep", route, ttl_s=1000)
    clock.advance(10)
    return TieredCache([memory]), memory


def test_run_once_returns_removed_count(expired_cache):
    cache, memory = expired_cache

    assert CacheSweeper(cache).run_once() == 2
    assert memory.size() == 1


def test_background_thread_sweeps_periodically(expired_cache):
    cache, memory = expired_cache
    sweeper = CacheSweeper(cache, interval_s=0.01)

    sweeper.start()
    try:
        deadline = time.monotonic() + 2
        while memory.size() > 1 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert sweeper.running
    finally:
        sweeper.stop(timeout=1)

    assert memory.size() == 1
    assert not sweeper.running


def test_rejects_non_positive_interval(expired_cache):
    cache, _ = expired_cache
    with pytest.raises(ValueError):
        CacheSweeper(cache, interval_s=0)
