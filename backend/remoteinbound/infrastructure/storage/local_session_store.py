"""Keeps the signed-in user in the local key/value store."""

import json
import logging
from dataclasses import asdict

from remoteinbound.application.interfaces import KeyValueStore, SessionEstablisher
from remoteinbound.application.services.row_mappers import user_from_row
from remoteinbound.domain.entities import User
from remoteinbound.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class LocalSessionStore(SessionEstablisher):
    """Persists the current user as JSON under ``<prefix>_current_user``."""

    def __init__(self, store: KeyValueStore, *, prefix: str = "remoteinbound"):
        self._store = store
        self._key = f"{prefix}_current_user"

    def establish(self, user: User) -> None:
        """Remember ``user``; a full store leaves nobody signed in rather than failing."""
        try:
            self._store.set_item(self._key, json.dumps(asdict(user), default=str))
        except StorageError as exc:
            logger.warning("Could not persist signed-in user %s: %s", user.id, exc)
            return
        logger.debug("Signed in user %s", user.id)

    def get_current_user(self) -> User | None:
        raw = self._store.get_item(self._key)
        if raw is None:
            return None
        try:
            return user_from_row(json.loads(raw))
        except (ValueError, KeyError, TypeError):
            logger.warning("Stored current user is unreadable; clearing it")
            self.clear()
            return None

    def clear(self) -> None:
        self._store.remove_item(self._key)
