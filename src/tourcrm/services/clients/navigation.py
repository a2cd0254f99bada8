"""Links handing a client's address to an external map application."""

from __future__ import annotations

from urllib.parse import urlencode

from ...models.domain import ClientRecord

MAPS_BASE_URL = "https://www.google.com/maps"


def _destination(record: ClientRecord) -> str:
    return f"{record.address.street} {record.address.city}".strip()


def search_url(record: ClientRecord) -> str:
    return f"{MAPS_BASE_URL}/search/?{urlencode({'api': 1, 'query': _destination(record)})}"


def directions_url(record: ClientRecord) -> str:
    return f"{MAPS_BASE_URL}/dir/?{urlencode({'api': 1, 'destination': _destination(record)})}"
