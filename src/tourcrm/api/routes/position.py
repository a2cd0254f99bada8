"""Position stream endpoints fed by the device."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...container import AppContainer
from ...schemas.clients import CoordinateModel
from ...schemas.sync import PositionReadingModel, PositionStatusModel
from ..dependencies import get_container

router = APIRouter(prefix="/position", tags=["position"])


def _status(container: AppContainer) -> PositionStatusModel:
    reading = container.position.latest()
    return PositionStatusModel(
        status=container.position.status(),
        position=CoordinateModel.from_domain(reading.coordinate) if reading else None,
        accuracy_m=reading.accuracy_m if reading else None,
        timestamp=reading.timestamp if reading else None,
    )


@router.get("", response_model=PositionStatusModel, status_code=status.HTTP_200_OK)
def get_position(container: AppContainer = Depends(get_container)) -> PositionStatusModel:
    return _status(container)


@router.post("", response_model=PositionStatusModel, status_code=status.HTTP_200_OK)
def report_position(
    payload: PositionReadingModel,
    container: AppContainer = Depends(get_container),
) -> PositionStatusModel:
    container.position.update(
        latitude=payload.latitude,
        longitude=payload.longitude,
        accuracy_m=payload.accuracy_m,
        timestamp=payload.timestamp,
    )
    return _status(container)


@router.post("/unavailable", response_model=PositionStatusModel, status_code=status.HTTP_200_OK)
def report_unavailable(container: AppContainer = Depends(get_container)) -> PositionStatusModel:
    container.position.mark_unavailable()
    return _status(container)
