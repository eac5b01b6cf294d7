"""Key-value persistence for per-farmer notification state."""

import json
import os
import re
import threading
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from harvestguard.utils.config import get_project_root, settings
from harvestguard.utils.errors import PersistenceError

KEY_PREFIX = "harvestguard_"


class MemoryStore:
    """In-process store, used in tests and for ephemeral runs."""

    def __init__(self):
        self._data: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            if key not in self._data:
                return default
            return json.loads(self._data[key])

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = json.dumps(value, default=str)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def query(self, prefix: str = "") -> list[str]:
        with self._lock:
            return sorted(k for k in self._data if k.startswith(prefix))


class JsonFileStore:
    """One JSON document per key under a data directory."""

    def __init__(self, data_dir: Optional[Path] = None):
        data_dir = Path(data_dir or settings.storage.data_dir)
        if not data_dir.is_absolute():
            data_dir = get_project_root() / data_dir
        self.data_dir = data_dir
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return self.data_dir / f"{safe}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            with open(path) as f:
                return json.load(f)["value"]
        except (OSError, ValueError, KeyError) as e:
            raise PersistenceError(f"Failed to read {key}: {e}") from e

    def put(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        with self._lock:
            try:
                with open(tmp, "w") as f:
                    json.dump({"key": key, "value": value}, f, default=str, ensure_ascii=False)
                os.replace(tmp, path)
            except (OSError, TypeError, ValueError) as e:
                raise PersistenceError(f"Failed to write {key}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Failed to delete {key}: {e}") from e

    def query(self, prefix: str = "") -> list[str]:
        keys = []
        for path in sorted(self.data_dir.glob("*.json")):
            try:
                with open(path) as f:
                    key = json.load(f).get("key", path.stem)
            except (OSError, ValueError):
                logger.warning(f"Skipping unreadable state file {path.name}")
                continue
            if key.startswith(prefix):
                keys.append(key)
        return keys


def get_store():
    """Build the store configured under storage.backend."""
    if settings.storage.backend == "memory":
        return MemoryStore()
    logger.info(f"Using file store at {settings.storage.data_dir}")
    return JsonFileStore()
