"""Abstract record store interface, shared by the remote and the local fallback store."""

from abc import ABC, abstractmethod
from typing import Any

Row = dict[str, Any]


class RecordStore(ABC):
    """Port for creating and looking up registration records.

    ``collection`` names a logical table (``users``, ``speakers``, ...).
    Implementations decide how ids and timestamps are assigned.
    """

    @abstractmethod
    async def find_by_field(self, collection: str, field: str, value: Any) -> Row | None:
        """Return the first record whose ``field`` equals ``value``, or None."""
        ...

    @abstractmethod
    async def create(self, collection: str, row: Row, *, id_prefix: str) -> Row:
        """Persist ``row`` and return the stored record including its ``id``.

        Args:
            collection: Logical collection name.
            row: Normalized record fields, without id or timestamps.
            id_prefix: Role tag used by stores that synthesize their own ids.
        """
        ...
