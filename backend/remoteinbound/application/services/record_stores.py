"""Record stores for registration writes and the adapter that picks between them.

``FallbackRecordStore`` is the only place that decides whether a record
lands in the hosted database or in local storage. Callers never see which
store accepted the write, except through the shape of the returned id
(see ``remoteinbound.domain.record_ids``).
"""

import logging
from typing import Any

from remoteinbound.application.interfaces import RecordStore, RemoteDataService
from remoteinbound.domain.exceptions import DuplicateEntityError, RemoteServiceError

logger = logging.getLogger(__name__)

Row = dict[str, Any]

DUPLICATE_EMAIL_MESSAGE = "An account with this email already exists."


class RemoteRecordStore(RecordStore):
    """RecordStore backed by the hosted database; the remote assigns ids."""

    def __init__(self, remote: RemoteDataService):
        self._remote = remote

    async def find_by_field(self, collection: str, field: str, value: Any) -> Row | None:
        return await self._remote.find_by_field(collection, field, value)

    async def create(self, collection: str, row: Row, *, id_prefix: str) -> Row:
        return await self._remote.create_entity(collection, row)


class FallbackRecordStore:
    """Writes to ``primary`` and degrades to ``fallback`` when the primary is unreachable.

    Duplicates are never retried elsewhere: a uniqueness hit in either
    store stops the write before anything is inserted.
    """

    def __init__(self, primary: RecordStore, fallback: RecordStore):
        self._primary = primary
        self._fallback = fallback

    async def create_unique(
        self,
        row: Row,
        *,
        remote_collection: str,
        local_collection: str,
        unique_field: str,
        id_prefix: str,
        entity_type: str = "User",
    ) -> Row:
        """Create ``row`` unless another record already has the same ``unique_field``.

        Raises:
            DuplicateEntityError: If the value is already taken.
        """
        value = row[unique_field]
        try:
            existing = await self._primary.find_by_field(remote_collection, unique_field, value)
            if existing is not None:
                raise DuplicateEntityError(
                    entity_type, unique_field, value, message=DUPLICATE_EMAIL_MESSAGE
                )
            return await self._primary.create(remote_collection, row, id_prefix=id_prefix)
        except RemoteServiceError as exc:
            if exc.status_code == 409:
                raise DuplicateEntityError(
                    entity_type, unique_field, value, message=DUPLICATE_EMAIL_MESSAGE
                ) from exc
            logger.warning(
                "Remote registration failed, using local storage fallback: %s", exc
            )

        existing = await self._fallback.find_by_field(local_collection, unique_field, value)
        if existing is not None:
            raise DuplicateEntityError(
                entity_type, unique_field, value, message=DUPLICATE_EMAIL_MESSAGE
            )
        stored = await self._fallback.create(local_collection, row, id_prefix=id_prefix)
        logger.info("Stored %s %s locally in '%s'", entity_type, stored["id"], local_collection)
        return stored
