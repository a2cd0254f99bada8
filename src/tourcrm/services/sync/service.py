"""Reconciliation between the local client collection and the remote store.

Policy:
  * startup: a non-empty remote collection replaces the local one in full
    ("remote wins"); an empty remote or a failed fetch keeps local data.
  * ongoing: every local client mutation schedules a full-collection upsert
    after a quiescence window; further mutations restart the window.
  * manual upload/download run immediately; download needs confirmation.

Records carry no version or modification time, so no finer merge is done.
Unsynced offline edits are lost when another device's copy wins on startup.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from ...config import settings
from ...data.store import ClientStore, MutationEvent, MutationOrigin
from ...errors import ConfirmationRequiredError, SyncNotConfiguredError
from ...persistence.filesystem import CLOUD_KEY, FileStorage
from ...persistence.remote import DocumentStore, SupabaseDocumentStore
from .scheduler import Debouncer, Scheduler, ThreadingScheduler

logger = logging.getLogger(__name__)


class SyncStatus(str, Enum):
    IDLE = "idle"
    SYNCING = "syncing"
    SAVED = "saved"
    ERROR = "error"


@dataclass(slots=True)
class CloudConfig:
    provider: str = "none"
    url: str = ""
    key: str = ""

    @property
    def configured(self) -> bool:
        return self.provider == "supabase" and bool(self.url) and bool(self.key)


def default_cloud_config() -> CloudConfig:
    if settings.supabase_configured:
        return CloudConfig(provider="supabase", url=settings.supabase_url or "", key=settings.supabase_key or "")
    return CloudConfig()


def _supabase_factory(config: CloudConfig) -> Optional[DocumentStore]:
    return SupabaseDocumentStore.from_credentials(config.url, config.key)


class SyncService:
    def __init__(
        self,
        store: ClientStore,
        *,
        storage: FileStorage | None = None,
        scheduler: Scheduler | None = None,
        debounce_seconds: float | None = None,
        remote_factory: Callable[[CloudConfig], Optional[DocumentStore]] = _supabase_factory,
        config: CloudConfig | None = None,
    ) -> None:
        self.store = store
        self._storage = storage
        self._remote_factory = remote_factory
        self.config = config or self._load_config()
        self.status = SyncStatus.IDLE
        self.last_synced_at: Optional[datetime] = None
        self._status_lock = threading.Lock()
        delay = settings.sync_debounce_seconds if debounce_seconds is None else debounce_seconds
        self._debouncer = Debouncer(scheduler or ThreadingScheduler(), delay, self._upload_snapshot)
        store.subscribe(self.on_store_event)

    @property
    def configured(self) -> bool:
        return self.config.configured

    @property
    def pending_upload(self) -> bool:
        return self._debouncer.pending

    def _load_config(self) -> CloudConfig:
        if self._storage is not None:
            raw = self._storage.read_json(CLOUD_KEY)
            if isinstance(raw, dict):
                provider = raw.get("provider")
                return CloudConfig(
                    provider=provider if provider in ("none", "supabase") else "none",
                    url=str(raw.get("url") or ""),
                    key=str(raw.get("key") or ""),
                )
        return default_cloud_config()

    def update_config(self, config: CloudConfig) -> None:
        self.config = config
        if self._storage is not None:
            self._storage.write_json(CLOUD_KEY, asdict(config))
        if config.configured:
            self._schedule_upload()
        else:
            self._debouncer.cancel()
            self._set_status(SyncStatus.IDLE)

    def _set_status(self, status: SyncStatus) -> None:
        with self._status_lock:
            self.status = status
            if status == SyncStatus.SAVED:
                self.last_synced_at = datetime.now(timezone.utc)

    def _remote(self) -> Optional[DocumentStore]:
        if not self.configured:
            return None
        return self._remote_factory(self.config)

    # Startup

    def reconcile_on_startup(self) -> SyncStatus:
        """Pull the remote collection once; it replaces local data when non-empty."""

        if not self.configured:
            logger.info("Remote sync not configured; using local snapshot only")
            return self.status

        self._set_status(SyncStatus.SYNCING)
        remote = self._remote()
        fetched = remote.fetch_all() if remote is not None else None
        if fetched is None:
            logger.warning("Startup sync failed; keeping local clients")
            self._set_status(SyncStatus.ERROR)
            return self.status

        if fetched:
            logger.info(f"Startup sync: replacing local clients with {len(fetched)} remote clients")
            self.store.replace_all(fetched, origin=MutationOrigin.REMOTE)
        else:
            logger.info("Startup sync: remote collection empty; keeping local clients")
        self._set_status(SyncStatus.SAVED)
        return self.status

    # Ongoing

    def on_store_event(self, event: MutationEvent) -> None:
        if event.kind != "clients" or event.origin != MutationOrigin.LOCAL:
            return
        if self.configured:
            self._schedule_upload()

    def _schedule_upload(self) -> None:
        self._set_status(SyncStatus.SYNCING)
        self._debouncer.trigger()

    def _upload_snapshot(self) -> bool:
        remote = self._remote()
        if remote is None:
            self._set_status(SyncStatus.ERROR)
            return False
        ok = remote.upsert_all(self.store.snapshot())
        if not ok:
            logger.warning("Upload to remote store failed")
        self._set_status(SyncStatus.SAVED if ok else SyncStatus.ERROR)
        return ok

    # Manual actions

    def force_upload(self) -> SyncStatus:
        if not self.configured:
            raise SyncNotConfiguredError("Remote sync is not configured.")
        self._debouncer.cancel()
        self._set_status(SyncStatus.SYNCING)
        self._upload_snapshot()
        return self.status

    def force_download(self, confirmed: bool) -> SyncStatus:
        """Overwrite local clients with the remote collection, even when it is empty."""

        if not self.configured:
            raise SyncNotConfiguredError("Remote sync is not configured.")
        if not confirmed:
            raise ConfirmationRequiredError("Downloading overwrites local clients; confirmation required.")

        self._debouncer.cancel()
        self._set_status(SyncStatus.SYNCING)
        remote = self._remote()
        fetched = remote.fetch_all() if remote is not None else None
        if fetched is None:
            self._set_status(SyncStatus.ERROR)
            return self.status
        self.store.replace_all(fetched, origin=MutationOrigin.REMOTE)
        logger.info(f"Downloaded {len(fetched)} clients from remote store")
        self._set_status(SyncStatus.SAVED)
        return self.status

    def shutdown(self) -> None:
        """Send an upload still waiting for its quiet window, then stop the timer."""
        if self._debouncer.flush():
            logger.info("Flushed pending upload on shutdown")
