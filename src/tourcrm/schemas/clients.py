"""Client record schemas used by the API and by snapshot/remote payloads."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import (
    Address,
    Attachment,
    ClientRecord,
    Coordinate,
    LedgerDirection,
    LedgerEntry,
    Note,
)


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    @classmethod
    def from_domain(cls, coordinate: Coordinate) -> "CoordinateModel":
        return cls(latitude=coordinate.latitude, longitude=coordinate.longitude)

    def to_domain(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class AddressModel(BaseModel):
    region: str = ""
    city: str = ""
    street: str = ""
    number: str = ""
    postal_code: str = ""


class NoteModel(BaseModel):
    id: str
    text: str
    alert_at: datetime
    completed: bool = False


class LedgerEntryModel(BaseModel):
    id: str
    amount: float = Field(..., ge=0)
    direction: LedgerDirection
    description: str = ""
    occurred_at: datetime
    alert_at: Optional[datetime] = None


class AttachmentModel(BaseModel):
    id: str
    filename: str
    content_type: str = ""
    url: str = ""


class ClientModel(BaseModel):
    """Full client record. Updates always replace the whole record."""

    id: str
    company_name: str
    coordinate: CoordinateModel
    first_name: str = ""
    last_name: str = ""
    address: AddressModel = Field(default_factory=AddressModel)
    tax_id: str = ""
    phone: str = ""
    whatsapp: str = ""
    email: str = ""
    website: str = ""
    logo_url: Optional[str] = None
    notes: List[NoteModel] = Field(default_factory=list)
    ledger: List[LedgerEntryModel] = Field(default_factory=list)
    attachments: List[AttachmentModel] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, record: ClientRecord) -> "ClientModel":
        return cls(
            id=record.id,
            company_name=record.company_name,
            coordinate=CoordinateModel.from_domain(record.coordinate),
            first_name=record.first_name,
            last_name=record.last_name,
            address=AddressModel(
                region=record.address.region,
                city=record.address.city,
                street=record.address.street,
                number=record.address.number,
                postal_code=record.address.postal_code,
            ),
            tax_id=record.tax_id,
            phone=record.phone,
            whatsapp=record.whatsapp,
            email=record.email,
            website=record.website,
            logo_url=record.logo_url,
            notes=[
                NoteModel(id=n.id, text=n.text, alert_at=n.alert_at, completed=n.completed)
                for n in record.notes
            ],
            ledger=[
                LedgerEntryModel(
                    id=e.id,
                    amount=e.amount,
                    direction=e.direction,
                    description=e.description,
                    occurred_at=e.occurred_at,
                    alert_at=e.alert_at,
                )
                for e in record.ledger
            ],
            attachments=[
                AttachmentModel(id=a.id, filename=a.filename, content_type=a.content_type, url=a.url)
                for a in record.attachments
            ],
            created_at=record.created_at,
        )

    def to_domain(self) -> ClientRecord:
        return ClientRecord(
            id=self.id,
            company_name=self.company_name,
            coordinate=self.coordinate.to_domain(),
            first_name=self.first_name,
            last_name=self.last_name,
            address=Address(**self.address.model_dump()),
            tax_id=self.tax_id,
            phone=self.phone,
            whatsapp=self.whatsapp,
            email=self.email,
            website=self.website,
            logo_url=self.logo_url,
            notes=[Note(**n.model_dump()) for n in self.notes],
            ledger=[LedgerEntry(**e.model_dump()) for e in self.ledger],
            attachments=[Attachment(**a.model_dump()) for a in self.attachments],
            created_at=self.created_at,
        )


class InitialLedgerEntry(BaseModel):
    amount: float = Field(..., ge=0)
    direction: LedgerDirection = LedgerDirection.DEBIT
    description: Optional[str] = None


class ClientCreateRequest(BaseModel):
    company_name: str
    first_name: str = ""
    last_name: str = ""
    address: AddressModel = Field(default_factory=AddressModel)
    tax_id: str = ""
    phone: str = ""
    whatsapp: str = ""
    email: str = ""
    website: str = ""
    logo_url: Optional[str] = None
    coordinate: Optional[CoordinateModel] = Field(
        default=None,
        description="Known position. When omitted the address is geocoded.",
    )
    initial_ledger_entry: Optional[InitialLedgerEntry] = None
    initial_note: Optional[str] = None
    attachments: List[AttachmentModel] = Field(default_factory=list)


class ClientCreateResponse(BaseModel):
    client: ClientModel
    approximate_location: bool


class LedgerSummaryModel(BaseModel):
    client_id: str
    total_debit: float
    total_credit: float
    balance: float


class NavigationLinksModel(BaseModel):
    client_id: str
    search_url: str
    directions_url: str


class ImportSummaryModel(BaseModel):
    imported: int
    client_ids: List[str]
