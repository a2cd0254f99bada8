"""Proximity filtering of clients around a reference point ("radar")."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..models.domain import ClientRecord, Coordinate
from .geospatial import distance_km


@dataclass(slots=True)
class NearbyClient:
    record: ClientRecord
    distance_km: float


def nearby(origin: Coordinate, radius_km: float, candidates: Iterable[ClientRecord]) -> list[NearbyClient]:
    """Return candidates within ``radius_km`` of ``origin``, closest first.

    Equal distances keep their input order.
    """

    hits = [NearbyClient(record=record, distance_km=distance_km(origin, record.coordinate)) for record in candidates]
    hits = [hit for hit in hits if hit.distance_km <= radius_km]
    hits.sort(key=lambda hit: hit.distance_km)
    return hits


class Radar:
    """On/off gate around :func:`nearby`.

    An inactive radar always returns an empty result; callers read :attr:`active`
    to tell "radar off" apart from "nothing in range".
    """

    def __init__(self, radius_km: float, active: bool = False) -> None:
        if radius_km <= 0:
            raise ValueError("Radar radius must be positive.")
        self.radius_km = radius_km
        self.active = active

    def configure(self, *, active: Optional[bool] = None, radius_km: Optional[float] = None) -> None:
        if radius_km is not None:
            if radius_km <= 0:
                raise ValueError("Radar radius must be positive.")
            self.radius_km = radius_km
        if active is not None:
            self.active = active

    def scan(self, origin: Optional[Coordinate], candidates: Iterable[ClientRecord]) -> list[NearbyClient]:
        if not self.active or origin is None:
            return []
        return nearby(origin, self.radius_km, candidates)
