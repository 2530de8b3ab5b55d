"""JSON-file key-value store: local state that survives restarts.

All keys live in a single JSON object on disk. Every write rewrites the file
through a temporary sibling and an atomic rename.
"""

import json
import os
import threading
from pathlib import Path

import structlog

from storefront.storage.port import KeyValueStore

logger = structlog.get_logger(__name__)


class FileStore(KeyValueStore):
    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Local store file is corrupted, starting empty", path=str(self.path))
            return {}

        if not isinstance(data, dict):
            logger.warning("Local store file has an unexpected shape, starting empty", path=str(self.path))
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._save(data)
