"""Tour request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import Stop, Tour, TourStatus
from ..services.routing.models import StartSource, TourPlan
from .clients import CoordinateModel

if TYPE_CHECKING:
    from ..services.weather import NextStopWeather


class StopModel(BaseModel):
    client_id: str
    scheduled_at: datetime


class TourModel(BaseModel):
    id: str
    name: str
    date: datetime
    stops: List[StopModel]
    status: TourStatus = TourStatus.PLANNED

    @classmethod
    def from_domain(cls, tour: Tour) -> "TourModel":
        return cls(
            id=tour.id,
            name=tour.name,
            date=tour.date,
            stops=[StopModel(client_id=s.client_id, scheduled_at=s.scheduled_at) for s in tour.stops],
            status=tour.status,
        )

    def to_domain(self) -> Tour:
        return Tour(
            id=self.id,
            name=self.name,
            date=self.date,
            stops=[Stop(client_id=s.client_id, scheduled_at=s.scheduled_at) for s in self.stops],
            status=self.status,
        )


class TourPlanRequest(BaseModel):
    client_ids: List[str] = Field(..., description="Selected clients, in selection order.")
    date: datetime
    start_point: Literal["position", "client"] = "position"
    start_client_id: Optional[str] = Field(
        default=None,
        description="Client whose location is the starting point when start_point is 'client'.",
    )
    allow_unoptimized: bool = Field(
        default=True,
        description="Accept selection order when no starting point is available.",
    )


class RouteLegModel(BaseModel):
    client_id: str
    sequence: int
    distance_from_prev_km: float


class TourPlanResponse(BaseModel):
    tour: TourModel
    optimized: bool
    start_source: StartSource
    start: Optional[CoordinateModel] = None
    total_distance_km: float
    legs: List[RouteLegModel]

    @classmethod
    def from_plan(cls, plan: TourPlan) -> "TourPlanResponse":
        return cls(
            tour=TourModel.from_domain(plan.tour),
            optimized=plan.optimized,
            start_source=plan.start_source,
            start=CoordinateModel.from_domain(plan.start) if plan.start else None,
            total_distance_km=plan.total_distance_km,
            legs=[
                RouteLegModel(
                    client_id=leg.client_id,
                    sequence=leg.sequence,
                    distance_from_prev_km=leg.distance_from_prev_km,
                )
                for leg in plan.legs
            ],
        )


class CurrentWeatherModel(BaseModel):
    temperature_c: float
    weather_code: int
    label: str


class NextStopWeatherModel(BaseModel):
    tour_id: str
    client_id: str
    city: str
    weather: CurrentWeatherModel

    @classmethod
    def from_domain(cls, result: NextStopWeather) -> "NextStopWeatherModel":
        return cls(
            tour_id=result.tour_id,
            client_id=result.client_id,
            city=result.city,
            weather=CurrentWeatherModel(
                temperature_c=result.weather.temperature_c,
                weather_code=result.weather.weather_code,
                label=result.weather.label,
            ),
        )
