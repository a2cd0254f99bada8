"""Domain models for client records and tours."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True, slots=True)
class Coordinate:
    """WGS84 position in decimal degrees."""

    latitude: float
    longitude: float


class LedgerDirection(str, Enum):
    DEBIT = "debit"  # amount owed by the client
    CREDIT = "credit"  # amount owed to the client


class TourStatus(str, Enum):
    PLANNED = "planned"
    COMPLETED = "completed"


@dataclass(slots=True)
class Address:
    region: str = ""
    city: str = ""
    street: str = ""
    number: str = ""
    postal_code: str = ""

    def one_line(self) -> str:
        street = f"{self.street} {self.number}".strip()
        locality = f"{self.postal_code} {self.city} {self.region}".strip()
        return ", ".join(part for part in (street, locality) if part)


@dataclass(slots=True)
class Note:
    id: str
    text: str
    alert_at: datetime
    completed: bool = False


@dataclass(slots=True)
class LedgerEntry:
    """Monetary record against a client. ``amount`` is never negative."""

    id: str
    amount: float
    direction: LedgerDirection
    description: str
    occurred_at: datetime
    alert_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Ledger amount must be non-negative; use the direction for the sign.")


@dataclass(slots=True)
class Attachment:
    id: str
    filename: str
    content_type: str = ""
    url: str = ""


@dataclass(slots=True)
class ClientRecord:
    """A client of the field representative together with notes, ledger and files."""

    id: str
    company_name: str
    coordinate: Coordinate
    first_name: str = ""
    last_name: str = ""
    address: Address = field(default_factory=Address)
    tax_id: str = ""
    phone: str = ""
    whatsapp: str = ""
    email: str = ""
    website: str = ""
    logo_url: Optional[str] = None
    notes: list[Note] = field(default_factory=list)
    ledger: list[LedgerEntry] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        if self.company_name:
            return self.company_name
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(slots=True)
class Stop:
    client_id: str
    scheduled_at: datetime


@dataclass(slots=True)
class Tour:
    """Dated visiting sequence; the order of ``stops`` is the visiting order."""

    id: str
    name: str
    date: datetime
    stops: list[Stop]
    status: TourStatus = TourStatus.PLANNED
