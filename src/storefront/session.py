"""Session identity: the anonymous id that keys a visitor's server-side cart."""

import secrets
import time

import structlog

from storefront import keys
from storefront.storage.port import KeyValueStore

logger = structlog.get_logger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_session_id() -> str:
    """``session-<epoch-millis>-<9 base-36 chars>``."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"session-{int(time.time() * 1000)}-{suffix}"


class SessionIdentityProvider:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def get_or_create_session_id(self) -> str:
        """Return the persisted session id, creating and persisting one on first call."""
        existing = self.store.get(keys.SESSION_ID)
        if isinstance(existing, str) and existing.strip():
            return existing

        session_id = generate_session_id()
        self.store.set(keys.SESSION_ID, session_id)
        logger.info("Started storefront session", session_id=session_id)
        return session_id
