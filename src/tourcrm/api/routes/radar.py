"""Radar endpoints: clients near the current or a given position."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...container import AppContainer
from ...models.domain import Coordinate
from ...schemas.clients import ClientModel, CoordinateModel
from ...schemas.sync import RadarHitModel, RadarResponse, RadarSettingsModel
from ...services.search import search_clients
from ..dependencies import get_container

router = APIRouter(prefix="/radar", tags=["radar"])


@router.get("", response_model=RadarResponse, status_code=status.HTTP_200_OK)
def scan(
    q: str | None = Query(default=None, description="Search query applied before the distance filter"),
    latitude: float | None = Query(default=None, ge=-90.0, le=90.0),
    longitude: float | None = Query(default=None, ge=-180.0, le=180.0),
    container: AppContainer = Depends(get_container),
) -> RadarResponse:
    """Clients within the radar radius, closest first.

    Without an explicit origin the live position is used. ``active`` is false
    when the radar is switched off, independently of the result size.
    """
    if (latitude is None) != (longitude is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide both latitude and longitude, or neither.",
        )
    if latitude is not None and longitude is not None:
        origin = Coordinate(latitude=latitude, longitude=longitude)
    else:
        origin = container.position.current()

    candidates = search_clients(container.store.snapshot(), q)
    hits = container.radar.scan(origin, candidates)
    return RadarResponse(
        active=container.radar.active,
        radius_km=container.radar.radius_km,
        origin=CoordinateModel.from_domain(origin) if origin else None,
        items=[RadarHitModel(client=ClientModel.from_domain(hit.record), distance_km=hit.distance_km) for hit in hits],
    )


@router.put("", response_model=RadarSettingsModel, status_code=status.HTTP_200_OK)
def configure(
    payload: RadarSettingsModel,
    container: AppContainer = Depends(get_container),
) -> RadarSettingsModel:
    container.radar.configure(active=payload.active, radius_km=payload.radius_km)
    return RadarSettingsModel(active=container.radar.active, radius_km=container.radar.radius_km)
