"""Excel import/export of client records."""

from __future__ import annotations

import random
import uuid
from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Iterable

from openpyxl import Workbook, load_workbook

from ...models.domain import Address, ClientRecord
from ..geocoding import fallback_coordinate

SHEET_TITLE = "Clients"
UNNAMED_COMPANY = "Unnamed"

EXPORT_COLUMNS = (
    "ID",
    "Company",
    "First Name",
    "Last Name",
    "Phone",
    "Email",
    "City",
    "Street",
    "Number",
    "Postal Code",
    "Region",
    "Tax ID",
    "Website",
)

# Accepted headers per field, first match wins. Italian headers come from older exports.
IMPORT_ALIASES: dict[str, tuple[str, ...]] = {
    "company_name": ("Company", "Azienda", "Ragione Sociale"),
    "first_name": ("First Name", "Nome"),
    "last_name": ("Last Name", "Cognome"),
    "phone": ("Phone", "Telefono", "Cellulare"),
    "email": ("Email",),
    "website": ("Website", "Sito"),
    "city": ("City", "Città"),
    "street": ("Street", "Indirizzo"),
    "number": ("Number", "Civico", "Numero"),
    "postal_code": ("Postal Code", "CAP"),
    "region": ("Region", "Provincia"),
    "tax_id": ("Tax ID", "PIVA", "Partita IVA"),
}


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _pick(row: dict[str, str], field: str) -> str:
    for header in IMPORT_ALIASES[field]:
        value = row.get(header, "")
        if value:
            return value
    return ""


def export_clients(records: Iterable[ClientRecord]) -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = SHEET_TITLE
    worksheet.append(list(EXPORT_COLUMNS))
    for record in records:
        worksheet.append(
            [
                record.id,
                record.company_name,
                record.first_name,
                record.last_name,
                record.phone,
                record.email,
                record.address.city,
                record.address.street,
                record.address.number,
                record.address.postal_code,
                record.address.region,
                record.tax_id,
                record.website,
            ]
        )
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def import_clients(payload: bytes, rng: random.Random | None = None) -> list[ClientRecord]:
    """Read the first worksheet into new client records.

    Every non-blank row becomes a record: missing values stay empty, a missing
    company becomes "Unnamed" and the location is the fallback coordinate.
    """

    workbook = load_workbook(filename=BytesIO(payload), read_only=True, data_only=True)
    worksheet = workbook.worksheets[0]
    rows = worksheet.iter_rows(values_only=True)
    header_row = next(rows, None)
    if not header_row:
        return []
    headers = [_cell_text(cell) for cell in header_row]

    now = datetime.now(timezone.utc)
    records: list[ClientRecord] = []
    for values in rows:
        row = {headers[i]: _cell_text(cell) for i, cell in enumerate(values) if i < len(headers)}
        if not any(row.values()):
            continue
        records.append(
            ClientRecord(
                id=str(uuid.uuid4()),
                company_name=_pick(row, "company_name") or UNNAMED_COMPANY,
                coordinate=fallback_coordinate(rng),
                first_name=_pick(row, "first_name"),
                last_name=_pick(row, "last_name"),
                address=Address(
                    region=_pick(row, "region"),
                    city=_pick(row, "city"),
                    street=_pick(row, "street"),
                    number=_pick(row, "number"),
                    postal_code=_pick(row, "postal_code"),
                ),
                tax_id=_pick(row, "tax_id"),
                phone=_pick(row, "phone"),
                email=_pick(row, "email"),
                website=_pick(row, "website"),
                created_at=now,
            )
        )
    workbook.close()
    return records
