"""Remote client collection backed by a Supabase table of (id, data) rows."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

from pydantic import ValidationError

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import ClientRecord
from ..schemas.clients import ClientModel

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Key-value document store keyed by client id."""

    def fetch_all(self) -> Optional[list[ClientRecord]]:
        """All remote records, or None when the store could not be read."""

    def upsert_all(self, records: Sequence[ClientRecord]) -> bool:
        """Write every record; True on success."""


class SupabaseDocumentStore:
    def __init__(self, client: Any, table: str | None = None, batch_size: int | None = None) -> None:
        self.client = client
        self.table = table or settings.supabase_table
        self.batch_size = batch_size or settings.supabase_batch_size

    @classmethod
    def from_credentials(cls, url: str, key: str) -> Optional["SupabaseDocumentStore"]:
        client = get_supabase_client(url, key)
        if client is None:
            return None
        return cls(client)

    def fetch_all(self) -> Optional[list[ClientRecord]]:
        try:
            response = self.client.table(self.table).select("data").execute()
        except Exception as e:
            logger.error(f"Failed to fetch clients from remote store: {e}")
            return None

        records: list[ClientRecord] = []
        for row in response.data or []:
            try:
                records.append(ClientModel.model_validate(row["data"]).to_domain())
            except (KeyError, TypeError, ValidationError) as e:
                # Skip invalid rows but continue processing
                logger.warning(f"Skipping invalid remote client row: {e}")
                continue
        return records

    def upsert_all(self, records: Sequence[ClientRecord]) -> bool:
        rows = [
            {"id": record.id, "data": ClientModel.from_domain(record).model_dump(mode="json")}
            for record in records
        ]
        if not rows:
            return True

        try:
            # Upsert in batches to stay under request size limits
            for i in range(0, len(rows), self.batch_size):
                batch = rows[i:i + self.batch_size]
                self.client.table(self.table).upsert(batch).execute()
        except Exception as e:
            logger.error(f"Failed to upsert clients to remote store: {e}")
            return False

        logger.info(f"Upserted {len(rows)} clients to remote store")
        return True
