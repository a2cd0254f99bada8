"""Client service helpers."""

from .navigation import directions_url, search_url
from .service import create_client, ledger_summary, require_client
from .spreadsheet import export_clients, import_clients

__all__ = [
    "create_client",
    "directions_url",
    "export_clients",
    "import_clients",
    "ledger_summary",
    "require_client",
    "search_url",
]
