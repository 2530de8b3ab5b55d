"""Local state store abstraction: pluggable persistence for the storefront."""

import os

_store_instance = None


def get_store():
    """Return the configured key-value store (singleton).

    Uses MemoryStore by default. Set STOREFRONT_STORE=file (and optionally
    STOREFRONT_STORE_PATH) to persist state to a JSON file.
    """
    global _store_instance
    if _store_instance is None:
        adapter = os.environ.get("STOREFRONT_STORE", "memory")
        if adapter == "memory":
            from storefront.storage.memory_adapter import MemoryStore

            _store_instance = MemoryStore()
        elif adapter == "file":
            from storefront.storage.file_adapter import FileStore

            _store_instance = FileStore(os.environ.get("STOREFRONT_STORE_PATH", ".qahwa/storefront.json"))
        else:
            raise ValueError(f"Unknown storefront store: {adapter}")
    return _store_instance


def reset_store():
    """Reset the store singleton (useful for testing)."""
    global _store_instance
    _store_instance = None
