import pandas as pd
import pytest

from route_cache.memory_store import MemoryCacheStore
from route_cache.tiered import TieredCache
from routing.errors import TransportBlockedError
from routing.haversine import HaversineProvider
from routing.models import ProviderName
from routing.resolver import RouteResolver
from scripts.resolve_routes_csv import resolve_frame
from tests.fakes import StubProvider


@pytest.fixture
def resolver():
    offline = StubProvider(ProviderName.OSRM, outcome=TransportBlockedError("osrm"))
    return RouteResolver([offline, HaversineProvider()], TieredCache([MemoryCacheStore()]))


def test_resolve_frame_appends_route_columns(resolver):
    df = pd.DataFrame([
        {"query_id": "q1", "origin_lat": 48.7758, "origin_lon": 9.1829, "dest_lat": 49.0069, "dest_lon": 8.4037},
        {"query_id": "q2", "origin_lat": 48.7758, "origin_lon": 9.1829, "dest_lat": 49.0069, "dest_lon": 8.4037},
        {"query_id": "q3", "origin_lat": 95.0, "origin_lon": 9.1829, "dest_lat": 49.0069, "dest_lon": 8.4037},
    ])

    out = resolve_frame(df, resolver)

    assert list(out["provider"]) == ["haversine", "cache", "invalid"]
    assert out.loc[0, "distance_m"] == out.loc[1, "distance_m"]
    assert out.loc[0, "confidence"] == 0.5
    assert pd.isna(out.loc[2, "distance_m"])
    # input frame untouched
    assert "provider" not in df.columns


def test_resolve_frame_requires_coordinate_columns(resolver):
    with pytest.raises(ValueError):
        resolve_frame(pd.DataFrame([{"origin_lat": 1.0}]), resolver)


def test_generated_queries_resolve_with_cache_hits(tmp_path):
    from scripts.generate_mock_queries import generate_mock_queries

    df = generate_mock_queries(num_queries=100, num_hubs=5, output_file=str(tmp_path / "q.csv"), seed=7)
    assert len(df) == 100
    assert (tmp_path / "q.csv").exists()

    cache = TieredCache([MemoryCacheStore(capacity=500)])
    out = resolve_frame(df, RouteResolver([HaversineProvider()], cache))

    assert set(out["provider"]) <= {"haversine", "cache"}
    assert cache.stats().hits > 0
    assert (out["distance_m"] > 0).all()
