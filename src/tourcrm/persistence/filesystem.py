"""File-based persistence of the local snapshot (clients, tours, sync config)."""

from __future__ import annotations

import json
import logging
import tempfile
import threading
from pathlib import Path
from typing import Any

from ..config import settings

logger = logging.getLogger(__name__)

CLIENTS_KEY = "clients"
TOURS_KEY = "tours"
CLOUD_KEY = "cloud"


class FileStorage:
    """Thin wrapper around the data root storing one JSON document per logical name."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self._write_lock = threading.Lock()

    def path_for(self, name: str) -> Path:
        return self.root / f"{name}.json"

    def read_json(self, name: str) -> Any | None:
        path = self.path_for(name)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except json.JSONDecodeError as exc:
            logger.warning(f"Ignoring unreadable snapshot {path}: {exc}")
            return None

    def write_json(self, name: str, data: Any, *, indent: int = 2) -> None:
        """Replace the named document atomically; concurrent writers never share a temp file."""
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._write_lock:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{name}.", suffix=".tmp")
            tmp_path = Path(tmp_name)
            try:
                with open(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, ensure_ascii=False, indent=indent)
                tmp_path.replace(path)
            except Exception:
                tmp_path.unlink(missing_ok=True)
                raise
