"""Latest device position, fed by an external location stream."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Literal, Optional

from ..config import settings
from ..models.domain import Coordinate

PositionStatus = Literal["searching", "active", "error"]


@dataclass(frozen=True, slots=True)
class PositionReading:
    coordinate: Coordinate
    accuracy_m: Optional[float]
    timestamp: datetime


class PositionTracker:
    """Keeps the most recent reading and applies the staleness policy.

    A reading older than ``max_age_seconds`` is never returned as the current
    position. When no fresh reading has been available for ``timeout_seconds``
    the status becomes ``error``.
    """

    def __init__(
        self,
        max_age_seconds: float | None = None,
        timeout_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_age_seconds = max_age_seconds if max_age_seconds is not None else settings.position_max_age_seconds
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.position_timeout_seconds
        self._clock = clock
        self._started_at = clock()
        self._reading: Optional[PositionReading] = None
        self._unavailable = False
        self._lock = threading.Lock()

    def update(
        self,
        latitude: float,
        longitude: float,
        accuracy_m: Optional[float] = None,
        timestamp: Optional[datetime] = None,
    ) -> PositionReading:
        if timestamp is None:
            timestamp = datetime.fromtimestamp(self._clock(), tz=timezone.utc)
        elif timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        reading = PositionReading(
            coordinate=Coordinate(latitude=latitude, longitude=longitude),
            accuracy_m=accuracy_m,
            timestamp=timestamp,
        )
        with self._lock:
            if self._reading is None or reading.timestamp >= self._reading.timestamp:
                self._reading = reading
            self._unavailable = False
        return reading

    def mark_unavailable(self) -> None:
        with self._lock:
            self._unavailable = True

    def _fresh_reading(self) -> Optional[PositionReading]:
        reading = self._reading
        if reading is None:
            return None
        age = self._clock() - reading.timestamp.timestamp()
        if age > self.max_age_seconds:
            return None
        return reading

    def latest(self) -> Optional[PositionReading]:
        with self._lock:
            return self._fresh_reading()

    def current(self) -> Optional[Coordinate]:
        reading = self.latest()
        return reading.coordinate if reading else None

    def status(self) -> PositionStatus:
        with self._lock:
            if self._unavailable:
                return "error"
            if self._fresh_reading() is not None:
                return "active"
            if self._reading is None:
                waiting_since = self._started_at
            else:
                waiting_since = self._reading.timestamp.timestamp() + self.max_age_seconds
            if self._clock() - waiting_since < self.timeout_seconds:
                return "searching"
            return "error"
