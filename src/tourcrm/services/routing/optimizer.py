"""Nearest-neighbour visiting order for a set of client stops.

The heuristic starts from a reference point, repeatedly walks to the closest
pending stop and never backtracks. It is O(n^2) in distance evaluations and
gives no optimality guarantee.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from ...errors import UnknownClientError
from ...models.domain import ClientRecord, Coordinate
from ..geospatial import distance_km


def _unique(ids: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for client_id in ids:
        if client_id not in seen:
            seen.add(client_id)
            ordered.append(client_id)
    return ordered


def optimize_order(
    start: Optional[Coordinate],
    stop_ids: Iterable[str],
    resolve: Callable[[str], Optional[ClientRecord]],
) -> list[str]:
    """Order ``stop_ids`` by greedy nearest neighbour from ``start``.

    Without a start point the ids are returned in their input order (degraded mode).
    Duplicate ids collapse to their first occurrence. An id that ``resolve`` cannot
    find raises :class:`UnknownClientError`, in either mode.
    """

    requested = _unique(stop_ids)
    pending: list[ClientRecord] = []
    for client_id in requested:
        record = resolve(client_id)
        if record is None:
            raise UnknownClientError(client_id)
        pending.append(record)

    if start is None:
        return requested

    ordered: list[str] = []
    current = start
    while pending:
        closest_index = 0
        min_distance = distance_km(current, pending[0].coordinate)
        for index in range(1, len(pending)):
            d = distance_km(current, pending[index].coordinate)
            # strict comparison keeps the first of equally distant stops
            if d < min_distance:
                min_distance = d
                closest_index = index
        closest = pending.pop(closest_index)
        ordered.append(closest.id)
        current = closest.coordinate
    return ordered


def leg_distances(start: Optional[Coordinate], path: list[Coordinate]) -> list[float]:
    """Distance of each leg along ``path``; the first leg is 0 without a start point."""

    legs: list[float] = []
    previous = start
    for point in path:
        legs.append(distance_km(previous, point) if previous is not None else 0.0)
        previous = point
    return legs
