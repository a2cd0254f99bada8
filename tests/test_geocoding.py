import random

import httpx

from tourcrm.config import settings
from tourcrm.models.domain import Coordinate
from tourcrm.services.geocoding import GeocodingClient, fallback_coordinate, locate


def _client(handler) -> GeocodingClient:
    return GeocodingClient(
        base_url="https://geo.test",
        max_retries=1,
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
    )


def test_geocode_parses_first_result():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["q"] = request.url.params["q"]
        return httpx.Response(200, json=[{"lat": "41.8986", "lon": "12.4769"}, {"lat": "0", "lon": "0"}])

    assert _client(handler).geocode("Via del Corso 1, Roma") == Coordinate(41.8986, 12.4769)
    assert seen["q"] == "Via del Corso 1, Roma"


def test_geocode_no_match_returns_none():
    assert _client(lambda request: httpx.Response(200, json=[])).geocode("nowhere") is None


def test_geocode_http_error_returns_none():
    assert _client(lambda request: httpx.Response(500)).geocode("Roma") is None


def test_geocode_retries_network_errors():
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(1)
        raise httpx.ConnectError("unreachable", request=request)

    assert _client(handler).geocode("Roma") is None
    assert len(attempts) == 2


def test_fallback_is_near_reference_point():
    rng = random.Random(3)
    points = [fallback_coordinate(rng) for _ in range(20)]
    for point in points:
        assert settings.fallback_latitude <= point.latitude <= settings.fallback_latitude + settings.fallback_jitter_degrees
        assert settings.fallback_longitude <= point.longitude <= settings.fallback_longitude + settings.fallback_jitter_degrees
    assert len(set(points)) == len(points)


def test_locate_marks_fallback_as_approximate():
    class FailingGeocoder:
        def geocode(self, address):
            return None

    result = locate("Via Inesistente", FailingGeocoder())
    assert result.approximate

    assert locate("Roma", None).approximate


def test_locate_uses_geocoder_result():
    class StaticGeocoder:
        def geocode(self, address):
            return Coordinate(45.0, 9.0)

    result = locate("Milano", StaticGeocoder())
    assert result.coordinate == Coordinate(45.0, 9.0)
    assert not result.approximate
