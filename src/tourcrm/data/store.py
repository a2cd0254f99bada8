"""Process-local client and tour collections with snapshot persistence."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Iterable, Literal, Optional, Protocol

from ..errors import UnknownClientError, UnknownTourError
from ..models.domain import ClientRecord, Tour, TourStatus
from ..persistence.filesystem import CLIENTS_KEY, TOURS_KEY, FileStorage
from ..schemas.clients import ClientModel
from ..schemas.tours import TourModel

logger = logging.getLogger(__name__)


class MutationOrigin(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True, slots=True)
class MutationEvent:
    kind: Literal["clients", "tours"]
    origin: MutationOrigin


Listener = Callable[[MutationEvent], None]


class ClientReader(Protocol):
    """Read-only view used by search, radar and route planning."""

    def snapshot(self) -> tuple[ClientRecord, ...]: ...

    def get(self, client_id: str) -> Optional[ClientRecord]: ...


class ClientStore:
    """Owns the client and tour collections.

    Mutations replace whole records, write the local snapshot and notify
    subscribers. Readers get immutable tuples of the current records.
    """

    def __init__(self, storage: FileStorage | None = None) -> None:
        self._storage = storage
        self._clients: list[ClientRecord] = []
        self._tours: list[Tour] = []
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

    @classmethod
    def load(cls, storage: FileStorage) -> "ClientStore":
        """Build a store from the local snapshot, verbatim."""

        store = cls(storage)
        raw_clients = storage.read_json(CLIENTS_KEY) or []
        raw_tours = storage.read_json(TOURS_KEY) or []
        store._clients = [ClientModel.model_validate(item).to_domain() for item in raw_clients]
        store._tours = [TourModel.model_validate(item).to_domain() for item in raw_tours]
        logger.info(f"Loaded {len(store._clients)} clients and {len(store._tours)} tours from local snapshot")
        return store

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    # Clients (read)

    def snapshot(self) -> tuple[ClientRecord, ...]:
        with self._lock:
            return tuple(self._clients)

    def get(self, client_id: str) -> Optional[ClientRecord]:
        with self._lock:
            return next((c for c in self._clients if c.id == client_id), None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)

    # Clients (write)

    def add(self, record: ClientRecord) -> None:
        self.add_many([record])

    def add_many(self, records: Iterable[ClientRecord]) -> None:
        with self._lock:
            new_records = list(records)
            existing = {c.id for c in self._clients}
            for record in new_records:
                if record.id in existing:
                    raise ValueError(f"Client {record.id} already exists")
                existing.add(record.id)
            self._clients.extend(new_records)
        self._clients_changed(MutationOrigin.LOCAL)

    def update(self, record: ClientRecord) -> None:
        with self._lock:
            for index, current in enumerate(self._clients):
                if current.id == record.id:
                    self._clients[index] = record
                    break
            else:
                raise UnknownClientError(record.id)
        self._clients_changed(MutationOrigin.LOCAL)

    def delete(self, client_id: str) -> None:
        with self._lock:
            remaining = [c for c in self._clients if c.id != client_id]
            if len(remaining) == len(self._clients):
                raise UnknownClientError(client_id)
            self._clients = remaining
        self._clients_changed(MutationOrigin.LOCAL)

    def replace_all(self, records: Iterable[ClientRecord], origin: MutationOrigin = MutationOrigin.REMOTE) -> None:
        with self._lock:
            self._clients = list(records)
        self._clients_changed(origin)

    # Tours

    def tours(self, status: Optional[TourStatus] = None, on_date: Optional[date] = None) -> tuple[Tour, ...]:
        """Tours in creation order, optionally limited to a status and a calendar day."""
        with self._lock:
            return tuple(
                t
                for t in self._tours
                if (status is None or t.status == status) and (on_date is None or t.date.date() == on_date)
            )

    def get_tour(self, tour_id: str) -> Optional[Tour]:
        with self._lock:
            return next((t for t in self._tours if t.id == tour_id), None)

    def add_tour(self, tour: Tour) -> None:
        with self._lock:
            self._tours.append(tour)
        self._tours_changed()

    def complete_tour(self, tour_id: str) -> Tour:
        with self._lock:
            tour = self.get_tour(tour_id)
            if tour is None:
                raise UnknownTourError(tour_id)
            tour.status = TourStatus.COMPLETED
        self._tours_changed()
        return tour

    def delete_tour(self, tour_id: str) -> None:
        with self._lock:
            remaining = [t for t in self._tours if t.id != tour_id]
            if len(remaining) == len(self._tours):
                raise UnknownTourError(tour_id)
            self._tours = remaining
        self._tours_changed()

    # Internals

    def _clients_changed(self, origin: MutationOrigin) -> None:
        # snapshot files follow mutation order; subscribers are notified even if the write fails
        try:
            if self._storage is not None:
                with self._lock:
                    payload = [ClientModel.from_domain(c).model_dump(mode="json") for c in self._clients]
                    self._storage.write_json(CLIENTS_KEY, payload)
        finally:
            self._emit(MutationEvent(kind="clients", origin=origin))

    def _tours_changed(self) -> None:
        try:
            if self._storage is not None:
                with self._lock:
                    payload = [TourModel.from_domain(t).model_dump(mode="json") for t in self._tours]
                    self._storage.write_json(TOURS_KEY, payload)
        finally:
            self._emit(MutationEvent(kind="tours", origin=MutationOrigin.LOCAL))

    def _emit(self, event: MutationEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Store listener failed for {event.kind} change")
