from datetime import datetime, timezone

import pytest

from tourcrm.data.store import ClientStore
from tourcrm.errors import ConfirmationRequiredError, UnknownClientError
from tourcrm.models.domain import ClientRecord, Coordinate, TourStatus
from tourcrm.schemas.tours import TourPlanRequest
from tourcrm.services.position import PositionTracker
from tourcrm.services.routing.models import StartSource
from tourcrm.services.routing.service import plan_tour

TOUR_DATE = datetime(2025, 5, 12, 9, 0, tzinfo=timezone.utc)


def _client(cid: str, lat: float, lon: float) -> ClientRecord:
    return ClientRecord(id=cid, company_name=f"Client {cid}", coordinate=Coordinate(lat, lon))


@pytest.fixture
def store() -> ClientStore:
    store = ClientStore()
    store.add_many([_client("A", 0, 1), _client("B", 0, 3), _client("C", 0, 2), _client("HOME", 0, 4)])
    return store


def _tracker_at(lat: float, lon: float) -> PositionTracker:
    tracker = PositionTracker(max_age_seconds=60, timeout_seconds=20)
    tracker.update(lat, lon)
    return tracker


def test_plan_from_live_position(store: ClientStore):
    request = TourPlanRequest(client_ids=["A", "B", "C"], date=TOUR_DATE)
    plan = plan_tour(request, store, _tracker_at(0, 0))

    assert plan.optimized
    assert plan.start_source == StartSource.POSITION
    assert [s.client_id for s in plan.tour.stops] == ["A", "C", "B"]
    assert all(s.scheduled_at == TOUR_DATE for s in plan.tour.stops)
    assert plan.tour.status == TourStatus.PLANNED
    assert plan.tour.name == "Tour of 2025-05-12"
    assert [leg.sequence for leg in plan.legs] == [1, 2, 3]
    assert plan.total_distance_km == pytest.approx(3 * 111.195, abs=0.05)
    assert store.tours() == (plan.tour,)


def test_plan_from_designated_client(store: ClientStore):
    request = TourPlanRequest(
        client_ids=["A", "B", "C"],
        date=TOUR_DATE,
        start_point="client",
        start_client_id="HOME",
    )
    plan = plan_tour(request, store, _tracker_at(0, 0))

    assert plan.start_source == StartSource.CLIENT
    assert [s.client_id for s in plan.tour.stops] == ["B", "C", "A"]


def test_missing_start_client_falls_back_to_position(store: ClientStore):
    request = TourPlanRequest(client_ids=["B", "A"], date=TOUR_DATE, start_point="client", start_client_id="GONE")
    plan = plan_tour(request, store, _tracker_at(0, 0))
    assert plan.start_source == StartSource.POSITION
    assert [s.client_id for s in plan.tour.stops] == ["A", "B"]


def test_without_start_point_keeps_selection_order(store: ClientStore):
    request = TourPlanRequest(client_ids=["B", "A", "C"], date=TOUR_DATE)
    plan = plan_tour(request, store, PositionTracker())

    assert not plan.optimized
    assert plan.start_source == StartSource.NONE
    assert [s.client_id for s in plan.tour.stops] == ["B", "A", "C"]
    assert plan.legs[0].distance_from_prev_km == 0.0


def test_unoptimized_plan_requires_consent(store: ClientStore):
    request = TourPlanRequest(client_ids=["A"], date=TOUR_DATE, allow_unoptimized=False)
    with pytest.raises(ConfirmationRequiredError):
        plan_tour(request, store, None)
    assert store.tours() == ()


def test_empty_selection_is_rejected(store: ClientStore):
    with pytest.raises(ValueError):
        plan_tour(TourPlanRequest(client_ids=[], date=TOUR_DATE), store, None)


def test_unknown_client_in_selection(store: ClientStore):
    with pytest.raises(UnknownClientError):
        plan_tour(TourPlanRequest(client_ids=["A", "NOPE"], date=TOUR_DATE), store, _tracker_at(0, 0))
    assert store.tours() == ()
