"""Remote sync policy and scheduling."""

from .scheduler import Debouncer, Scheduler, ThreadingScheduler
from .service import CloudConfig, SyncService, SyncStatus

__all__ = ["CloudConfig", "Debouncer", "Scheduler", "SyncService", "SyncStatus", "ThreadingScheduler"]
