"""Client create/update helpers."""

from __future__ import annotations

import logging
import random
import uuid
from datetime import datetime, timezone
from typing import Optional

from ...data.store import ClientStore
from ...errors import UnknownClientError
from ...models.domain import (
    Address,
    Attachment,
    ClientRecord,
    LedgerDirection,
    LedgerEntry,
    Note,
)
from ...schemas.clients import ClientCreateRequest
from ..geocoding import Geocoder, LocationResult, locate

logger = logging.getLogger(__name__)

OPENING_BALANCE_DESCRIPTION = "Opening balance"


def create_client(
    request: ClientCreateRequest,
    store: ClientStore,
    geocoder: Optional[Geocoder] = None,
    rng: random.Random | None = None,
) -> tuple[ClientRecord, bool]:
    """Create and store a client; returns the record and whether its location is approximate."""

    now = datetime.now(timezone.utc)
    address = Address(**request.address.model_dump())

    if request.coordinate is not None:
        location = LocationResult(coordinate=request.coordinate.to_domain(), approximate=False)
    else:
        location = locate(address.one_line(), geocoder, rng)

    ledger: list[LedgerEntry] = []
    if request.initial_ledger_entry and request.initial_ledger_entry.amount:
        ledger.append(
            LedgerEntry(
                id=str(uuid.uuid4()),
                amount=request.initial_ledger_entry.amount,
                direction=request.initial_ledger_entry.direction,
                description=request.initial_ledger_entry.description or OPENING_BALANCE_DESCRIPTION,
                occurred_at=now,
            )
        )

    notes: list[Note] = []
    if request.initial_note:
        notes.append(Note(id=str(uuid.uuid4()), text=request.initial_note, alert_at=now))

    record = ClientRecord(
        id=str(uuid.uuid4()),
        company_name=request.company_name,
        coordinate=location.coordinate,
        first_name=request.first_name,
        last_name=request.last_name,
        address=address,
        tax_id=request.tax_id,
        phone=request.phone,
        whatsapp=request.whatsapp,
        email=request.email,
        website=request.website,
        logo_url=request.logo_url,
        notes=notes,
        ledger=ledger,
        attachments=[Attachment(**a.model_dump()) for a in request.attachments],
        created_at=now,
    )
    store.add(record)
    if location.approximate:
        logger.warning(f"Client {record.id} stored with an approximate location")
    return record, location.approximate


def require_client(store: ClientStore, client_id: str) -> ClientRecord:
    record = store.get(client_id)
    if record is None:
        raise UnknownClientError(client_id)
    return record


def ledger_summary(record: ClientRecord) -> dict:
    """Debit/credit totals; a positive balance is owed by the client."""

    total_debit = sum(e.amount for e in record.ledger if e.direction == LedgerDirection.DEBIT)
    total_credit = sum(e.amount for e in record.ledger if e.direction == LedgerDirection.CREDIT)
    return {
        "client_id": record.id,
        "total_debit": round(total_debit, 2),
        "total_credit": round(total_credit, 2),
        "balance": round(total_debit - total_credit, 2),
    }
