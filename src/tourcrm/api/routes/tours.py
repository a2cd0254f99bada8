"""Tour planning endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...container import AppContainer
from ...errors import ConfirmationRequiredError, UnknownClientError, UnknownTourError
from ...models.domain import TourStatus
from ...schemas.tours import NextStopWeatherModel, TourModel, TourPlanRequest, TourPlanResponse
from ...services.routing.service import plan_tour
from ...services.weather import next_stop_weather
from ..dependencies import get_container

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tours", tags=["tours"])


@router.post("/plan", response_model=TourPlanResponse, status_code=status.HTTP_201_CREATED)
def plan(payload: TourPlanRequest, container: AppContainer = Depends(get_container)) -> TourPlanResponse:
    try:
        return TourPlanResponse.from_plan(plan_tour(payload, container.store, container.position))
    except UnknownClientError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConfirmationRequiredError as exc:
        raise HTTPException(status_code=status.HTTP_428_PRECONDITION_REQUIRED, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error planning tour: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan tour: {str(exc)}",
        ) from exc


@router.get("", response_model=List[TourModel], status_code=status.HTTP_200_OK)
def list_tours(
    status_filter: TourStatus | None = Query(default=None, alias="status", description="planned or completed"),
    on_date: date | None = Query(default=None, alias="date", description="Calendar day (YYYY-MM-DD) of the tour"),
    container: AppContainer = Depends(get_container),
) -> List[TourModel]:
    tours = container.store.tours(status_filter, on_date)
    return [TourModel.from_domain(tour) for tour in tours]


@router.get("/next/weather", response_model=Optional[NextStopWeatherModel], status_code=status.HTTP_200_OK)
def get_next_stop_weather(container: AppContainer = Depends(get_container)) -> Optional[NextStopWeatherModel]:
    """Current weather at the first stop of the next planned tour, or null when unavailable."""
    result = next_stop_weather(container.store, container.weather)
    return NextStopWeatherModel.from_domain(result) if result else None


@router.post("/{tour_id}/complete", response_model=TourModel, status_code=status.HTTP_200_OK)
def complete(tour_id: str, container: AppContainer = Depends(get_container)) -> TourModel:
    try:
        return TourModel.from_domain(container.store.complete_tour(tour_id))
    except UnknownTourError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.delete("/{tour_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(tour_id: str, container: AppContainer = Depends(get_container)) -> Response:
    try:
        container.store.delete_tour(tour_id)
    except UnknownTourError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
