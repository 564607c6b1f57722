import pytest

from route_cache.sqlite_store import SQLiteCacheStore
from routing.models import Coordinate, ProviderName
from tests.fakes import FakeClock, route_between

STUTTGART = Coordinate(48.7758, 9.1829)
KARLSRUHE = Coordinate(49.0069, 8.4037)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "cache" / "routes.sqlite3")


@pytest.fixture
def route():
    return route_between(STUTTGART, KARLSRUHE, ProviderName.VALHALLA, distance_m=80000, duration_s=3600, confidence=0.8)


def test_store_and_retrieve(db_path, clock, route):
    store = SQLiteCacheStore(db_path, clock=clock)
    assert store.is_available()

    store.set("k", route)

    assert store.get("k") == route
    assert store.size() == 1


def test_survives_restart(db_path, clock, route):
    first = SQLiteCacheStore(db_path, clock=clock)
    first.set("k", route)
    first.close()

    second = SQLiteCacheStore(db_path, clock=clock)
    assert second.get("k") == route


def test_expired_entry_is_deleted_on_read(db_path, clock, route):
    store = SQLiteCacheStore(db_path, clock=clock)
    store.set("k", route, ttl_s=1.0)

    clock.advance(1.1)

    assert store.get("k") is None
    assert store.size() == 0


def test_default_ttl_is_one_hour(db_path, clock, route):
    store = SQLiteCacheStore(db_path, clock=clock)
    store.set("k", route)

    clock.advance(59 * 60)
    assert store.get("k") == route

    clock.advance(2 * 60)
    assert store.get("k") is None


def test_clear(db_path, clock, route):
    store = SQLiteCacheStore(db_path, clock=clock)
    store.set("a", route)
    store.set("b", route)

    store.clear()

    assert store.size() == 0


def test_unavailable_when_location_cannot_be_created(tmp_path):
    blocker = tmp_path / "not_a_directory"
    blocker.write_text("x")

    store = SQLiteCacheStore(str(blocker / "routes.sqlite3"))

    assert store.is_available() is False


def test_reports_remaining_ttl(db_path, clock, route):
    store = SQLiteCacheStore(db_path, default_ttl_s=100, clock=clock)
    store.set("k", route)
    clock.advance(40)

    result, remaining_s = store.get_with_ttl("k")

    assert result == route
    assert remaining_s == pytest.approx(60)
    store.close()
