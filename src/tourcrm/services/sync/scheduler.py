"""Deferred execution with cancel-and-reschedule semantics."""

from __future__ import annotations

import functools
import logging
import threading
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class ScheduledHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, delay: float, action: Callable[[], None]) -> ScheduledHandle: ...


class ThreadingScheduler:
    """Runs each action once on a daemon timer thread after ``delay`` seconds."""

    def schedule(self, delay: float, action: Callable[[], None]) -> ScheduledHandle:
        timer = threading.Timer(delay, action)
        timer.daemon = True
        timer.start()
        return timer


class Debouncer:
    """Collapses bursts of :meth:`trigger` calls into one action.

    Each trigger cancels the pending action and schedules a new one ``delay``
    seconds later, so the action fires once the triggers have been quiet for
    the whole window. An action that already started is never interrupted.
    """

    def __init__(self, scheduler: Scheduler, delay: float, action: Callable[[], None]) -> None:
        self._scheduler = scheduler
        self.delay = delay
        self._action = action
        self._handle: Optional[ScheduledHandle] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._generation += 1
            self._handle = self._scheduler.schedule(
                self.delay, functools.partial(self._fire, self._generation)
            )

    def cancel(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._handle = None
            self._generation += 1

    def flush(self) -> bool:
        """Run a pending action now instead of at the end of its window."""
        with self._lock:
            if self._handle is None:
                return False
            self._handle.cancel()
            self._handle = None
            self._generation += 1
        self._action()
        return True

    def _fire(self, generation: int) -> None:
        with self._lock:
            # a timer cancelled too late to stop its thread must not run
            if generation != self._generation:
                return
            self._handle = None
        self._action()
