"""Fallback record store that keeps registration records in the local key/value store.

Layout: one JSON array per collection under ``<prefix>_<collection>``,
e.g. ``remoteinbound_speakers``. The key/value store is synchronous, so the
async methods run their store I/O in a worker thread. Appends are serialized
within the process; across processes the last writer wins.
"""

import asyncio
import json
import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from remoteinbound.application.interfaces import KeyValueStore, RecordStore
from remoteinbound.domain.record_ids import make_local_id

logger = logging.getLogger(__name__)

Row = dict[str, Any]

_append_lock = threading.Lock()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LocalRecordStore(RecordStore):
    """Implements the RecordStore port on a KeyValueStore.

    Args:
        store: Durable key/value store shared with the cache.
        prefix: Namespace for collection keys.
        clock: Returns the current UTC time; injectable for tests.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        prefix: str = "remoteinbound",
        clock: Callable[[], datetime] | None = None,
    ):
        self._store = store
        self._prefix = prefix
        self._clock = clock or _utc_now

    def collection_key(self, collection: str) -> str:
        return f"{self._prefix}_{collection}"

    def list_records(self, collection: str) -> list[Row]:
        """Return every record in ``collection``; a corrupt list reads as empty."""
        key = self.collection_key(collection)
        raw = self._store.get_item(key)
        if raw is None:
            return []
        try:
            records = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Local collection '%s' is corrupt; treating it as empty", key)
            return []
        if not isinstance(records, list):
            logger.warning("Local collection '%s' is not a list; treating it as empty", key)
            return []
        return [r for r in records if isinstance(r, dict)]

    def _find(self, collection: str, field: str, value: Any) -> Row | None:
        for record in self.list_records(collection):
            if record.get(field) == value:
                return record
        return None

    async def find_by_field(self, collection: str, field: str, value: Any) -> Row | None:
        return await asyncio.to_thread(self._find, collection, field, value)

    async def create(self, collection: str, row: Row, *, id_prefix: str) -> Row:
        """Append ``row`` with a synthesized id and fresh timestamps.

        Raises:
            StorageError: If the key/value store rejects the write.
        """
        return await asyncio.to_thread(self._append, collection, row, id_prefix)

    def _append(self, collection: str, row: Row, id_prefix: str) -> Row:
        with _append_lock:
            records = self.list_records(collection)
            now = self._clock()
            epoch_ms = int(now.timestamp() * 1000)

            # Two creates in the same millisecond would otherwise share an id.
            taken = {r.get("id") for r in records}
            record_id = make_local_id(id_prefix, epoch_ms)
            while record_id in taken:
                epoch_ms += 1
                record_id = make_local_id(id_prefix, epoch_ms)

            stamp = now.isoformat()
            record = {**row, "id": record_id, "created_at": stamp, "updated_at": stamp}
            records.append(record)
            self._store.set_item(self.collection_key(collection), json.dumps(records))
            return record
