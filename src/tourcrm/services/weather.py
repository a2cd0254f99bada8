"""Current weather at the first stop of the next planned tour."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

from ..config import settings
from ..data.store import ClientStore
from ..models.domain import Coordinate, TourStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CurrentWeather:
    temperature_c: float
    weather_code: int

    @property
    def label(self) -> str:
        return describe_weather_code(self.weather_code)


@dataclass(frozen=True, slots=True)
class NextStopWeather:
    tour_id: str
    client_id: str
    city: str
    weather: CurrentWeather


class WeatherProvider(Protocol):
    def current(self, coordinate: Coordinate) -> Optional[CurrentWeather]: ...


def describe_weather_code(code: int) -> str:
    """Coarse label for a WMO weather code."""
    if code == 0:
        return "sunny"
    if 1 <= code <= 3:
        return "partly cloudy"
    if 45 <= code <= 48:
        return "fog"
    if code >= 51:
        return "rain"
    return "variable"


class WeatherClient:
    """HTTP client for an Open-Meteo compatible ``/forecast`` endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float = 0.5,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.weather_base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("Weather base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.weather_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.weather_max_retries
        self.backoff_seconds = backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=5.0), transport=self._transport)

    def current(self, coordinate: Coordinate) -> Optional[CurrentWeather]:
        """Best-effort lookup; None when the service fails or answers without current weather."""
        params = {
            "latitude": coordinate.latitude,
            "longitude": coordinate.longitude,
            "current_weather": "true",
        }
        url = f"{self.base_url}/forecast"
        attempt = 0
        with self._get_client() as client:
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    return _parse_current_weather(response.json())
                except (httpx.TimeoutException, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"Weather lookup failed after {self.max_retries} retries: {e}")
                        return None
                    time.sleep(self.backoff_seconds * (2 ** (attempt - 1)))
                except (httpx.HTTPError, ValueError) as e:
                    logger.warning(f"Weather request failed: {e}")
                    return None


def _parse_current_weather(payload: object) -> Optional[CurrentWeather]:
    if not isinstance(payload, dict):
        return None
    current = payload.get("current_weather")
    if not isinstance(current, dict):
        return None
    try:
        return CurrentWeather(
            temperature_c=float(current["temperature"]),
            weather_code=int(current["weathercode"]),
        )
    except (KeyError, TypeError, ValueError):
        return None


def next_stop_weather(store: ClientStore, provider: Optional[WeatherProvider]) -> Optional[NextStopWeather]:
    """Weather at the first stop of the earliest planned tour that has stops.

    None when there is no such tour, its first client is gone, or the lookup fails.
    """
    if provider is None:
        return None
    planned = [t for t in store.tours(TourStatus.PLANNED) if t.stops]
    if not planned:
        return None
    # timestamp() orders naive and aware dates alike
    tour = min(planned, key=lambda t: t.date.timestamp())
    client_id = tour.stops[0].client_id
    client = store.get(client_id)
    if client is None:
        logger.info(f"First stop {client_id} of tour {tour.id} no longer exists")
        return None

    weather = provider.current(client.coordinate)
    if weather is None:
        return None
    return NextStopWeather(tour_id=tour.id, client_id=client_id, city=client.address.city, weather=weather)

