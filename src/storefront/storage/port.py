"""Key-value store port: where the storefront keeps its local state.

Values are whole JSON documents stored as strings. The storefront programs
against the port; adapters are swapped via configuration.
"""

import json
from abc import ABC, abstractmethod

import structlog

logger = structlog.get_logger(__name__)


class KeyValueStore(ABC):
    """Abstract interface for local persistence adapters."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored string, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a string under the key, replacing any previous value."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete the key. Removing an absent key is not an error."""
        ...

    def read_json(self, key: str, default=None):
        """Decode the document under ``key``; corrupted documents read as ``default``."""
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.warning("Discarding corrupted local document", key=key)
            return default

    def write_json(self, key: str, document) -> None:
        self.set(key, json.dumps(document, ensure_ascii=False))
