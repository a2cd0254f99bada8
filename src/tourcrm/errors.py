"""Domain errors raised by the engine and translated to HTTP responses by the API."""

from __future__ import annotations


class UnknownClientError(ValueError):
    def __init__(self, client_id: str) -> None:
        super().__init__(f"Client {client_id} not found")
        self.client_id = client_id


class UnknownTourError(ValueError):
    def __init__(self, tour_id: str) -> None:
        super().__init__(f"Tour {tour_id} not found")
        self.tour_id = tour_id


class SyncNotConfiguredError(ValueError):
    """Raised by manual sync actions when no remote store is configured."""


class ConfirmationRequiredError(ValueError):
    """Raised when a destructive action is requested without explicit confirmation."""
