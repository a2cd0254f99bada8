"""Shared test fixtures: a manually advanced scheduler and an in-memory document store."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import pytest

from tourcrm.models.domain import ClientRecord


class _Task:
    def __init__(self, due: float, action: Callable[[], None]) -> None:
        self.due = due
        self.action = action
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Scheduler whose clock only moves when the test calls :meth:`advance`."""

    def __init__(self) -> None:
        self.now = 0.0
        self.tasks: list[_Task] = []

    def schedule(self, delay: float, action: Callable[[], None]) -> _Task:
        task = _Task(self.now + delay, action)
        self.tasks.append(task)
        return task

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (t for t in self.tasks if not t.cancelled and t.due <= self.now),
            key=lambda t: t.due,
        )
        for task in due:
            self.tasks.remove(task)
            task.action()

    @property
    def pending(self) -> int:
        return sum(1 for t in self.tasks if not t.cancelled)


class FakeDocumentStore:
    def __init__(self, records: Optional[list[ClientRecord]] = None) -> None:
        self.records = list(records or [])
        self.fetch_calls = 0
        self.upserts: list[list[ClientRecord]] = []
        self.fail = False

    def fetch_all(self) -> Optional[list[ClientRecord]]:
        self.fetch_calls += 1
        if self.fail:
            return None
        return list(self.records)

    def upsert_all(self, records: Sequence[ClientRecord]) -> bool:
        if self.fail:
            return False
        self.upserts.append(list(records))
        by_id = {r.id: r for r in self.records}
        for record in records:
            by_id[record.id] = record
        self.records = list(by_id.values())
        return True


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def remote() -> FakeDocumentStore:
    return FakeDocumentStore()
