"""Domain models."""

from .domain import (
    Address,
    Attachment,
    ClientRecord,
    Coordinate,
    LedgerDirection,
    LedgerEntry,
    Note,
    Stop,
    Tour,
    TourStatus,
)

__all__ = [
    "Address",
    "Attachment",
    "ClientRecord",
    "Coordinate",
    "LedgerDirection",
    "LedgerEntry",
    "Note",
    "Stop",
    "Tour",
    "TourStatus",
]
