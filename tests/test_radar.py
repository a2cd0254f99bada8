import math

import pytest

from tourcrm.models.domain import ClientRecord, Coordinate
from tourcrm.services.geospatial import EARTH_RADIUS_KM
from tourcrm.services.radar import Radar, nearby


KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180
ORIGIN = Coordinate(0.0, 0.0)


def _client_at_km(cid: str, km: float) -> ClientRecord:
    return ClientRecord(id=cid, company_name=f"Client {cid}", coordinate=Coordinate(0.0, km / KM_PER_DEGREE))


def test_nearby_sorts_ascending():
    candidates = [_client_at_km("A", 3), _client_at_km("B", 1), _client_at_km("C", 2)]
    result = nearby(ORIGIN, 10, candidates)
    assert [hit.record.id for hit in result] == ["B", "C", "A"]
    assert [round(hit.distance_km, 6) for hit in result] == [1.0, 2.0, 3.0]


def test_nearby_excludes_out_of_range():
    candidates = [_client_at_km("A", 3), _client_at_km("B", 12)]
    assert [hit.record.id for hit in nearby(ORIGIN, 10, candidates)] == ["A"]


def test_equal_distances_keep_input_order():
    candidates = [
        _client_at_km("X", 2),
        ClientRecord(id="Y", company_name="Y", coordinate=Coordinate(0.0, -2 / KM_PER_DEGREE)),
        _client_at_km("Z", 1),
    ]
    assert [hit.record.id for hit in nearby(ORIGIN, 10, candidates)] == ["Z", "X", "Y"]


def test_smaller_radius_is_subset():
    candidates = [_client_at_km(str(i), i * 1.5) for i in range(12)]
    for r1, r2 in [(1, 2), (2.5, 7), (0, 20), (5, 5.5)]:
        small = {hit.record.id for hit in nearby(ORIGIN, r1, candidates)}
        large = {hit.record.id for hit in nearby(ORIGIN, r2, candidates)}
        assert small <= large


def test_inactive_radar_returns_nothing():
    radar = Radar(radius_km=50)
    candidates = [_client_at_km("A", 1)]
    assert radar.scan(ORIGIN, candidates) == []

    radar.configure(active=True)
    assert [hit.record.id for hit in radar.scan(ORIGIN, candidates)] == ["A"]


def test_active_radar_without_origin_returns_nothing():
    radar = Radar(radius_km=50, active=True)
    assert radar.scan(None, [_client_at_km("A", 1)]) == []


def test_radar_rejects_non_positive_radius():
    with pytest.raises(ValueError):
        Radar(radius_km=0)
    radar = Radar(radius_km=5)
    with pytest.raises(ValueError):
        radar.configure(radius_km=-1)
