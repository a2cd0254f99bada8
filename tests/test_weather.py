from datetime import datetime, timezone

import httpx

from tourcrm.data.store import ClientStore
from tourcrm.models.domain import Address, ClientRecord, Coordinate, Stop, Tour
from tourcrm.services.weather import CurrentWeather, WeatherClient, describe_weather_code, next_stop_weather

DAY = datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)


def _client(handler) -> WeatherClient:
    return WeatherClient(
        base_url="https://weather.test/v1",
        max_retries=1,
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
    )


class RecordingProvider:
    def __init__(self, result: CurrentWeather | None = CurrentWeather(temperature_c=21.5, weather_code=2)) -> None:
        self.result = result
        self.calls: list[Coordinate] = []

    def current(self, coordinate: Coordinate):
        self.calls.append(coordinate)
        return self.result


def _store() -> ClientStore:
    store = ClientStore()
    store.add_many(
        [
            ClientRecord(id="A", company_name="A", coordinate=Coordinate(45.07, 7.68), address=Address(city="Torino")),
            ClientRecord(id="B", company_name="B", coordinate=Coordinate(41.9, 12.5), address=Address(city="Roma")),
        ]
    )
    return store


def test_current_weather_is_parsed():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["current"] = request.url.params["current_weather"]
        return httpx.Response(200, json={"current_weather": {"temperature": 18.2, "weathercode": 61}})

    weather = _client(handler).current(Coordinate(45.0, 7.6))

    assert weather == CurrentWeather(temperature_c=18.2, weather_code=61)
    assert weather.label == "rain"
    assert seen == {"path": "/v1/forecast", "current": "true"}


def test_failures_return_none():
    assert _client(lambda request: httpx.Response(503)).current(Coordinate(0, 0)) is None
    assert _client(lambda request: httpx.Response(200, json={"hourly": {}})).current(Coordinate(0, 0)) is None

    attempts = []

    def unreachable(request: httpx.Request) -> httpx.Response:
        attempts.append(1)
        raise httpx.ConnectTimeout("slow", request=request)

    assert _client(unreachable).current(Coordinate(0, 0)) is None
    assert len(attempts) == 2


def test_weather_code_labels():
    assert describe_weather_code(0) == "sunny"
    assert describe_weather_code(3) == "partly cloudy"
    assert describe_weather_code(45) == "fog"
    assert describe_weather_code(80) == "rain"
    assert describe_weather_code(10) == "variable"


def test_next_stop_weather_uses_earliest_planned_tour():
    store = _store()
    store.add_tour(Tour(id="LATER", name="later", date=DAY.replace(day=5), stops=[Stop("A", DAY)]))
    store.add_tour(Tour(id="SOON", name="soon", date=DAY, stops=[Stop("B", DAY), Stop("A", DAY)]))
    store.add_tour(Tour(id="EMPTY", name="empty", date=DAY.replace(day=1, hour=6), stops=[]))
    provider = RecordingProvider()

    result = next_stop_weather(store, provider)

    assert result.tour_id == "SOON"
    assert result.client_id == "B"
    assert result.city == "Roma"
    assert provider.calls == [Coordinate(41.9, 12.5)]


def test_next_stop_weather_skips_completed_and_missing():
    store = _store()
    provider = RecordingProvider()
    assert next_stop_weather(store, provider) is None

    store.add_tour(Tour(id="DONE", name="done", date=DAY, stops=[Stop("A", DAY)]))
    store.complete_tour("DONE")
    assert next_stop_weather(store, provider) is None

    store.add_tour(Tour(id="GONE", name="gone", date=DAY, stops=[Stop("Z", DAY)]))
    assert next_stop_weather(store, provider) is None
    assert provider.calls == []

    assert next_stop_weather(store, None) is None


def test_next_stop_weather_lookup_failure_is_none():
    store = _store()
    store.add_tour(Tour(id="T", name="t", date=DAY, stops=[Stop("A", DAY)]))
    assert next_stop_weather(store, RecordingProvider(result=None)) is None
