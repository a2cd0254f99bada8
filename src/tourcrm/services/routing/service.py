"""High-level tour planning orchestrator."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from ...data.store import ClientReader, ClientStore
from ...errors import ConfirmationRequiredError, UnknownClientError
from ...models.domain import Coordinate, Stop, Tour, TourStatus
from ...schemas.tours import TourPlanRequest
from ..position import PositionTracker
from .models import RouteLeg, StartSource, TourPlan
from .optimizer import leg_distances, optimize_order

logger = logging.getLogger(__name__)


def resolve_start(
    request: TourPlanRequest,
    clients: ClientReader,
    position: Optional[PositionTracker],
) -> tuple[Optional[Coordinate], StartSource]:
    """Pick the starting point: a designated client, else the live position."""

    if request.start_point == "client" and request.start_client_id:
        start_client = clients.get(request.start_client_id)
        if start_client is not None:
            return start_client.coordinate, StartSource.CLIENT
        logger.warning(f"Start client {request.start_client_id} not found; trying live position")

    current = position.current() if position is not None else None
    if current is not None:
        return current, StartSource.POSITION
    return None, StartSource.NONE


def plan_tour(
    request: TourPlanRequest,
    store: ClientStore,
    position: Optional[PositionTracker] = None,
) -> TourPlan:
    """Order the selected clients, store the resulting tour and describe its legs."""

    if not request.client_ids:
        raise ValueError("At least one client must be selected to plan a tour.")

    start, source = resolve_start(request, store, position)
    if start is None:
        if not request.allow_unoptimized:
            raise ConfirmationRequiredError(
                "No starting point available (position unavailable or start client not found); "
                "the tour would keep selection order."
            )
        logger.warning("No starting point available; tour keeps selection order")

    ordered_ids = optimize_order(start, request.client_ids, store.get)

    path: list[Coordinate] = []
    for client_id in ordered_ids:
        record = store.get(client_id)
        if record is None:
            raise UnknownClientError(client_id)
        path.append(record.coordinate)
    distances = leg_distances(start, path)

    tour = Tour(
        id=str(uuid.uuid4()),
        name=f"Tour of {request.date:%Y-%m-%d}",
        date=request.date,
        stops=[Stop(client_id=client_id, scheduled_at=request.date) for client_id in ordered_ids],
        status=TourStatus.PLANNED,
    )
    store.add_tour(tour)
    logger.info(f"Planned tour {tour.id} with {len(ordered_ids)} stops (start: {source.value})")

    return TourPlan(
        tour=tour,
        optimized=start is not None,
        start_source=source,
        start=start,
        total_distance_km=sum(distances),
        legs=[
            RouteLeg(client_id=client_id, sequence=seq, distance_from_prev_km=dist)
            for seq, (client_id, dist) in enumerate(zip(ordered_ids, distances), start=1)
        ],
    )
