"""Abstract remote data service interface — port for the hosted database.

Rows are plain dicts using the hosted database column names (snake_case).
Mapping rows to domain entities is the application layer's job.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

Row = dict[str, Any]


class RemoteDataService(ABC):
    """Port — defines what the application layer needs from the hosted database."""

    @property
    @abstractmethod
    def service_name(self) -> str:
        """Short name used in logs and error messages (e.g. 'supabase')."""
        ...

    @abstractmethod
    async def create_entity(self, resource: str, payload: Row) -> Row:
        """Insert a row and return it as stored (with id and timestamps).

        Raises:
            RemoteServiceError: On any non-2xx response or transport failure.
        """
        ...

    @abstractmethod
    async def get_entity(self, resource: str, entity_id: str) -> Row | None:
        """Fetch a row by primary key. Returns None when it does not exist."""
        ...

    @abstractmethod
    async def list_entities(
        self,
        resource: str,
        filters: Mapping[str, Any] | None = None,
        *,
        search: str | None = None,
        search_fields: Sequence[str] = (),
    ) -> list[Row]:
        """List rows, optionally restricted by equality filters.

        When ``search`` is given, rows must also contain it (case-insensitive)
        in at least one of ``search_fields``.
        """
        ...

    @abstractmethod
    async def find_by_field(self, resource: str, field: str, value: Any) -> Row | None:
        """Return the first row whose ``field`` equals ``value``, or None."""
        ...

    @abstractmethod
    async def update_entity(self, resource: str, entity_id: str, changes: Row) -> Row | None:
        """Apply ``changes`` to a row. Returns the updated row, or None if absent."""
        ...

    @abstractmethod
    async def delete_entity(self, resource: str, entity_id: str) -> bool:
        """Delete a row by primary key. Returns False when nothing was deleted."""
        ...
