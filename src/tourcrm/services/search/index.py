"""Multi-field client lookup with AND semantics over query tokens."""

from __future__ import annotations

from typing import Iterable, Sequence

from ...models.domain import ClientRecord
from .text import normalize, tokenize


def composite_text(record: ClientRecord) -> str:
    """Space-joined searchable text of a record (not yet normalized)."""

    parts: list[str] = [
        record.company_name,
        record.first_name,
        record.last_name,
        record.address.city,
        record.address.street,
        record.address.postal_code,
        record.address.region,
        record.phone,
        record.tax_id,
        record.email,
        record.website,
    ]
    parts.extend(note.text for note in record.notes)
    parts.extend(entry.description for entry in record.ledger)
    parts.extend(attachment.filename for attachment in record.attachments)
    return " ".join(part for part in parts if part)


def matches(record: ClientRecord, query_tokens: Sequence[str]) -> bool:
    """True when every token is a substring of the normalized composite text.

    Tokens are expected to come from :func:`tokenize`. No tokens matches every record.
    """

    if not query_tokens:
        return True
    searchable = normalize(composite_text(record))
    return all(token in searchable for token in query_tokens)


def search_clients(records: Iterable[ClientRecord], query: str | None) -> list[ClientRecord]:
    """Filter ``records`` by a free-text query, preserving their order."""

    tokens = tokenize(query)
    if not tokens:
        return list(records)
    return [record for record in records if matches(record, tokens)]
