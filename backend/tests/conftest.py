"""Shared fakes and fixtures for the RemoteInbound test suite."""

import itertools
import uuid
from collections.abc import Mapping, Sequence
from typing import Any

import pytest

from remoteinbound.application.interfaces import RemoteDataService
from remoteinbound.application.services import VersionedTTLCache
from remoteinbound.domain.exceptions import RemoteServiceError
from remoteinbound.infrastructure.storage import InMemoryKeyValueStore


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeRemoteDataService(RemoteDataService):
    """In-memory hosted database that records every call.

    Set ``fail`` to make every call raise RemoteServiceError, as if the
    hosted database were unreachable. ``fail_on`` maps one operation
    ("create", "update", ...) to the error that operation should raise.
    """

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None):
        self.tables: dict[str, list[dict[str, Any]]] = {
            name: [dict(r) for r in rows] for name, rows in (tables or {}).items()
        }
        self.calls: list[tuple[str, str, Any]] = []
        self.fail = False
        self.fail_on: dict[str, RemoteServiceError] = {}
        self._ticks = itertools.count(1)

    @property
    def service_name(self) -> str:
        return "fake"

    def _check(self, op: str, resource: str, arg: Any = None) -> None:
        self.calls.append((op, resource, arg))
        if self.fail:
            raise RemoteServiceError(self.service_name, None, "connection refused")
        if op in self.fail_on:
            raise self.fail_on[op]

    def calls_of(self, op: str) -> list[tuple[str, str, Any]]:
        return [c for c in self.calls if c[0] == op]

    async def create_entity(self, resource: str, payload: dict[str, Any]) -> dict[str, Any]:
        self._check("create", resource, payload)
        stamp = f"2024-09-0{min(next(self._ticks), 9)}T10:00:00+00:00"
        row = {**payload, "id": str(uuid.uuid4()), "created_at": stamp, "updated_at": stamp}
        self.tables.setdefault(resource, []).append(row)
        return dict(row)

    async def get_entity(self, resource: str, entity_id: str) -> dict[str, Any] | None:
        self._check("get", resource, entity_id)
        for row in self.tables.get(resource, []):
            if str(row.get("id")) == entity_id:
                return dict(row)
        return None

    async def list_entities(
        self,
        resource: str,
        filters: Mapping[str, Any] | None = None,
        *,
        search: str | None = None,
        search_fields: Sequence[str] = (),
    ) -> list[dict[str, Any]]:
        self._check("list", resource, dict(filters) if filters else None)
        rows = [
            dict(r)
            for r in self.tables.get(resource, [])
            if all(r.get(k) == v for k, v in (filters or {}).items())
        ]
        if search:
            term = search.lower()
            rows = [
                r for r in rows
                if any(term in str(r.get(f) or "").lower() for f in search_fields)
            ]
        return rows

    async def find_by_field(self, resource: str, field: str, value: Any) -> dict[str, Any] | None:
        self._check("find", resource, (field, value))
        for row in self.tables.get(resource, []):
            if row.get(field) == value:
                return dict(row)
        return None

    async def update_entity(
        self, resource: str, entity_id: str, changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        self._check("update", resource, (entity_id, changes))
        for row in self.tables.get(resource, []):
            if str(row.get("id")) == entity_id:
                row.update(changes)
                return dict(row)
        return None

    async def delete_entity(self, resource: str, entity_id: str) -> bool:
        self._check("delete", resource, entity_id)
        rows = self.tables.get(resource, [])
        for index, row in enumerate(rows):
            if str(row.get("id")) == entity_id:
                del rows[index]
                return True
        return False


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def cache(kv_store: InMemoryKeyValueStore, clock: FakeClock) -> VersionedTTLCache:
    return VersionedTTLCache(kv_store, prefix="test_cache", clock=clock)


@pytest.fixture
def remote() -> FakeRemoteDataService:
    return FakeRemoteDataService()
