"""Key/value store backed by a SQLAlchemy table (SQLite by default).

Each operation runs in its own short session and commits before returning,
so a value is durable as soon as ``set_item`` returns.
"""

import logging

from sqlalchemy import Engine, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from remoteinbound.application.interfaces import KeyValueStore
from remoteinbound.domain.exceptions import StorageError, StorageQuotaExceededError
from remoteinbound.infrastructure.database import Base, KeyValueEntryModel, create_session_factory

logger = logging.getLogger(__name__)


def _entry_size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class SQLAlchemyKeyValueStore(KeyValueStore):
    """Implements the KeyValueStore port on top of the ``kv_entries`` table.

    Args:
        session_factory: Sync session factory bound to the store engine.
        quota_bytes: Total capacity (keys plus values, UTF-8). None disables it.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        quota_bytes: int | None = None,
    ):
        self._session_factory = session_factory
        self._quota_bytes = quota_bytes

    @classmethod
    def from_engine(cls, engine: Engine, *, quota_bytes: int | None = None) -> "SQLAlchemyKeyValueStore":
        """Create the table if needed and return a store bound to ``engine``."""
        Base.metadata.create_all(engine, tables=[KeyValueEntryModel.__table__])
        return cls(create_session_factory(engine), quota_bytes=quota_bytes)

    def get_item(self, key: str) -> str | None:
        try:
            with self._session_factory() as session:
                model = session.get(KeyValueEntryModel, key)
                return model.value if model is not None else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read '{key}': {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        size = _entry_size(key, value)
        try:
            with self._session_factory() as session:
                model = session.get(KeyValueEntryModel, key)
                if self._quota_bytes is not None:
                    used = session.scalar(select(func.coalesce(func.sum(KeyValueEntryModel.size), 0)))
                    required = int(used or 0) - (model.size if model is not None else 0) + size
                    if required > self._quota_bytes:
                        raise StorageQuotaExceededError(key, required, self._quota_bytes)

                if model is None:
                    session.add(KeyValueEntryModel(key=key, value=value, size=size))
                else:
                    model.value = value
                    model.size = size
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to write '{key}': {exc}") from exc

    def remove_item(self, key: str) -> None:
        try:
            with self._session_factory() as session:
                session.execute(delete(KeyValueEntryModel).where(KeyValueEntryModel.key == key))
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to remove '{key}': {exc}") from exc

    def keys(self) -> list[str]:
        try:
            with self._session_factory() as session:
                return list(session.scalars(select(KeyValueEntryModel.key).order_by(KeyValueEntryModel.key)))
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to list keys: {exc}") from exc

    def used_bytes(self) -> int:
        """Total bytes currently stored, as counted against the quota."""
        try:
            with self._session_factory() as session:
                used = session.scalar(select(func.coalesce(func.sum(KeyValueEntryModel.size), 0)))
                return int(used or 0)
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to measure store size: {exc}") from exc
