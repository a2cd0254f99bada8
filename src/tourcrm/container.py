"""Explicit wiring of the engine components shared by the API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .config import settings
from .data.store import ClientStore
from .persistence.filesystem import FileStorage
from .persistence.remote import DocumentStore
from .services.geocoding import Geocoder, GeocodingClient
from .services.position import PositionTracker
from .services.radar import Radar
from .services.sync import CloudConfig, Scheduler, SyncService
from .services.weather import WeatherClient, WeatherProvider

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppContainer:
    store: ClientStore
    position: PositionTracker
    radar: Radar
    sync: SyncService
    geocoder: Optional[Geocoder] = None
    weather: Optional[WeatherProvider] = None


def build_container(
    storage: FileStorage | None = None,
    *,
    scheduler: Scheduler | None = None,
    remote_factory: Callable[[CloudConfig], Optional[DocumentStore]] | None = None,
    geocoder: Optional[Geocoder] = None,
    weather: Optional[WeatherProvider] = None,
) -> AppContainer:
    storage = storage or FileStorage()
    store = ClientStore.load(storage)

    sync_kwargs: dict = {"storage": storage, "scheduler": scheduler}
    if remote_factory is not None:
        sync_kwargs["remote_factory"] = remote_factory
    sync = SyncService(store, **sync_kwargs)

    if geocoder is None and settings.geocoder_base_url:
        geocoder = GeocodingClient()
    if geocoder is None:
        logger.warning("Geocoder not configured; new clients get the fallback location")
    if weather is None and settings.weather_base_url:
        weather = WeatherClient()

    return AppContainer(
        store=store,
        position=PositionTracker(),
        radar=Radar(radius_km=settings.radar_default_radius_km),
        sync=sync,
        geocoder=geocoder,
        weather=weather,
    )
