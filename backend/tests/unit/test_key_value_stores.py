"""Unit tests for the key/value store adapters and the local session store."""

import pytest

from remoteinbound.domain.entities import User, UserRole
from remoteinbound.domain.exceptions import StorageQuotaExceededError
from remoteinbound.infrastructure.database import create_store_engine
from remoteinbound.infrastructure.storage import (
    InMemoryKeyValueStore,
    LocalSessionStore,
    SQLAlchemyKeyValueStore,
)


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryKeyValueStore(quota_bytes=200)
    engine = create_store_engine(f"sqlite:///{tmp_path / 'store.db'}")
    return SQLAlchemyKeyValueStore.from_engine(engine, quota_bytes=200)


def test_set_get_remove(store):
    assert store.get_item("a") is None
    store.set_item("a", "1")
    store.set_item("a", "2")
    assert store.get_item("a") == "2"
    assert store.keys() == ["a"]

    store.remove_item("a")
    store.remove_item("a")
    assert store.get_item("a") is None
    assert store.keys() == []


def test_quota_counts_keys_and_values(store):
    store.set_item("k1", "x" * 100)

    with pytest.raises(StorageQuotaExceededError) as exc_info:
        store.set_item("k2", "y" * 100)

    assert exc_info.value.quota == 200
    assert store.get_item("k2") is None


def test_overwrite_reuses_existing_allowance(store):
    store.set_item("k", "x" * 150)
    store.set_item("k", "z" * 190)
    assert store.get_item("k") == "z" * 190


def test_sqlite_store_is_durable(tmp_path):
    url = f"sqlite:///{tmp_path / 'nested' / 'store.db'}"
    SQLAlchemyKeyValueStore.from_engine(create_store_engine(url)).set_item("k", "v")

    reopened = SQLAlchemyKeyValueStore.from_engine(create_store_engine(url))
    assert reopened.get_item("k") == "v"
    assert reopened.used_bytes() == 2


def test_session_store_round_trip():
    kv = InMemoryKeyValueStore()
    sessions = LocalSessionStore(kv, prefix="remoteinbound")
    user = User(
        id="speaker_1718000000000",
        email="ada@example.com",
        full_name="Ada",
        created_at="2024-09-03T12:00:00+00:00",
        updated_at="2024-09-03T12:00:00+00:00",
        role=UserRole.SPEAKER,
    )

    sessions.establish(user)

    assert kv.keys() == ["remoteinbound_current_user"]
    assert sessions.get_current_user() == user

    sessions.clear()
    assert sessions.get_current_user() is None


def test_session_store_ignores_full_store():
    sessions = LocalSessionStore(InMemoryKeyValueStore(quota_bytes=10))
    user = User(id="u", email="a@b.co", full_name="A", created_at="", updated_at="")

    sessions.establish(user)

    assert sessions.get_current_user() is None
