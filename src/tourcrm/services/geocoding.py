"""Address to coordinate lookup with a documented fallback location."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

from ..config import settings
from ..models.domain import Coordinate

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    def geocode(self, address: str) -> Optional[Coordinate]: ...


@dataclass(slots=True)
class LocationResult:
    coordinate: Coordinate
    approximate: bool


class GeocodingClient:
    """HTTP client for a Nominatim-compatible ``/search`` endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.geocoder_base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("Geocoder base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.geocoder_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.geocoder_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.geocoder_backoff_seconds
        self.user_agent = user_agent or settings.geocoder_user_agent
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    def geocode(self, address: str) -> Optional[Coordinate]:
        """Best-effort lookup; None when the address is unknown or the service fails."""
        if not address.strip():
            return None

        params = {"q": address, "format": "json", "limit": 1}
        url = f"{self.base_url}/search"
        attempt = 0
        with self._get_client() as client:
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    return _parse_first_result(response.json())
                except (httpx.TimeoutException, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"Geocoding failed after {self.max_retries} retries: {e}")
                        return None
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Geocoder unreachable, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except (httpx.HTTPError, ValueError) as e:
                    logger.warning(f"Geocoding request for '{address}' failed: {e}")
                    return None


def _parse_first_result(payload: object) -> Optional[Coordinate]:
    if not isinstance(payload, list) or not payload:
        return None
    first = payload[0]
    try:
        lat = float(first["lat"])
        lon = float(first["lon"])
    except (KeyError, TypeError, ValueError):
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None
    return Coordinate(latitude=lat, longitude=lon)


def fallback_coordinate(rng: random.Random | None = None) -> Coordinate:
    """Default reference point plus a small random offset so records do not stack exactly."""

    rng = rng or random.Random()
    jitter = settings.fallback_jitter_degrees
    return Coordinate(
        latitude=settings.fallback_latitude + rng.random() * jitter,
        longitude=settings.fallback_longitude + rng.random() * jitter,
    )


def locate(address: str, geocoder: Optional[Geocoder], rng: random.Random | None = None) -> LocationResult:
    """Geocode ``address``; never fails, falling back to an approximate coordinate."""

    coordinate = geocoder.geocode(address) if geocoder is not None else None
    if coordinate is not None:
        return LocationResult(coordinate=coordinate, approximate=False)
    logger.warning(f"Using fallback coordinate for address '{address}'")
    return LocationResult(coordinate=fallback_coordinate(rng), approximate=True)
