"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ...models.domain import Coordinate, Tour


class StartSource(str, Enum):
    POSITION = "position"
    CLIENT = "client"
    NONE = "none"


@dataclass(slots=True)
class RouteLeg:
    client_id: str
    sequence: int
    distance_from_prev_km: float


@dataclass(slots=True)
class TourPlan:
    tour: Tour
    optimized: bool
    start_source: StartSource
    start: Optional[Coordinate]
    total_distance_km: float
    legs: List[RouteLeg]
