import pytest

from routing.errors import InvalidInputError, NoRouteFoundError, RateLimitedError, UnknownProviderError
from routing.models import Coordinate, ProviderName
from routing.policy import RoutingPolicy
from routing.valhalla_client import ValhallaClient
from tests.fakes import FakeResponse, FakeSession

STUTTGART = Coordinate(48.7758, 9.1829)
KARLSRUHE = Coordinate(49.0069, 8.4037)


def make_client(handler):
    session = FakeSession(handler)
    client = ValhallaClient(RoutingPolicy(valhalla_base_url="http://valhalla.test"), session=session)
    return client, session


def test_route_success_converts_kilometers_to_meters():
    payload = {
        "trip": {
            "summary": {"length": 80, "time": 3600},
            "legs": [{"summary": {"length": 80, "time": 3600}, "shape": "_p~iF~ps|U_ulLnnqC_mqNvxq`@"}],
        }
    }
    client, _ = make_client(lambda method, url, kwargs: FakeResponse(200, payload))

    result = client.route(STUTTGART, KARLSRUHE)

    assert result.distance_m == 80000
    assert result.duration_s == 3600
    assert result.provider == ProviderName.VALHALLA
    assert result.confidence == 0.8
    assert len(result.geometry) == 3
    assert result.geometry[0] == Coordinate(38.5, -120.2)


def test_request_body_shape():
    payload = {"trip": {"summary": {"length": 1, "time": 60}, "legs": [{"summary": {"length": 1, "time": 60}}]}}
    client, session = make_client(lambda method, url, kwargs: FakeResponse(200, payload))

    client.route(STUTTGART, KARLSRUHE)

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://valhalla.test/route"
    assert call["json"] == {
        "locations": [{"lat": 48.7758, "lon": 9.1829}, {"lat": 49.0069, "lon": 8.4037}],
        "costing": "auto",
        "directions_options": {"units": "kilometers"},
    }


def test_legs_without_shape_use_straight_line_and_summed_totals():
    payload = {
        "trip": {
            "legs": [
                {"summary": {"length": 30, "time": 1200}},
                {"summary": {"length": 50, "time": 2400}},
            ]
        }
    }
    client, _ = make_client(lambda method, url, kwargs: FakeResponse(200, payload))

    result = client.route(STUTTGART, KARLSRUHE)

    assert result.distance_m == 80000
    assert result.duration_s == 3600
    assert result.geometry == (STUTTGART, KARLSRUHE)


@pytest.mark.parametrize("payload", [{"trip": None}, {"trip": {"legs": []}}, {}])
def test_missing_trip_or_legs_raises_no_route(payload):
    client, _ = make_client(lambda method, url, kwargs: FakeResponse(200, payload))

    with pytest.raises(NoRouteFoundError):
        client.route(STUTTGART, KARLSRUHE)


def test_http_429_raises_rate_limited():
    client, _ = make_client(lambda method, url, kwargs: FakeResponse(429))

    with pytest.raises(RateLimitedError) as excinfo:
        client.route(STUTTGART, KARLSRUHE)

    assert excinfo.value.provider == "valhalla"
    assert excinfo.value.retry_after_s == 60


def test_http_500_raises_unknown():
    client, _ = make_client(lambda method, url, kwargs: FakeResponse(500))

    with pytest.raises(UnknownProviderError):
        client.route(STUTTGART, KARLSRUHE)


def test_invalid_json_raises_unknown():
    client, _ = make_client(lambda method, url, kwargs: FakeResponse(200, ValueError("not json")))

    with pytest.raises(UnknownProviderError):
        client.route(STUTTGART, KARLSRUHE)


def test_invalid_coordinates_raise_before_request():
    client, session = make_client(lambda method, url, kwargs: FakeResponse(200, {}))

    with pytest.raises(InvalidInputError):
        client.route(Coordinate(0, 181), KARLSRUHE)

    assert session.calls == []


@pytest.mark.parametrize("payload", [
    {"trip": ["x"]},
    {"trip": {"summary": {"length": 1, "time": 60}, "legs": ["x"]}},
    {"trip": {"legs": [{"summary": "x"}]}},
    {"trip": {"summary": {"length": 1, "time": 60}, "legs": [{"shape": "_p~iF~ps|U_ulL"}]}},
])
def test_garbled_trip_raises_unknown(payload):
    client, _ = make_client(lambda method, url, kwargs: FakeResponse(200, payload))

    with pytest.raises(UnknownProviderError):
        client.route(STUTTGART, KARLSRUHE)
