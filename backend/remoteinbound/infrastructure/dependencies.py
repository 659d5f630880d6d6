"""FastAPI dependency injection — wires infrastructure to application layer.

The key/value store, the cache and the hosted-database client are
process-wide singletons; services are cheap wrappers built per request.
"""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends

from remoteinbound.config import get_settings
from remoteinbound.application.interfaces import KeyValueStore, RemoteDataService
from remoteinbound.application.services import (
    ConferenceContentService,
    EventRegistrationService,
    FallbackRecordStore,
    RegistrationService,
    RemoteRecordStore,
    UserService,
    VersionedTTLCache,
)
from remoteinbound.infrastructure.database import get_engine
from remoteinbound.infrastructure.storage import (
    LocalRecordStore,
    LocalSessionStore,
    SQLAlchemyKeyValueStore,
)
from remoteinbound.infrastructure.supabase import SupabaseRestClient


@lru_cache
def get_key_value_store() -> KeyValueStore:
    """Durable local store shared by the cache, fallback records and the session."""
    settings = get_settings()
    return SQLAlchemyKeyValueStore.from_engine(
        get_engine(), quota_bytes=settings.local_store_quota_bytes
    )


@lru_cache
def get_cache() -> VersionedTTLCache:
    settings = get_settings()
    return VersionedTTLCache(
        get_key_value_store(),
        prefix=settings.cache_prefix,
        default_ttl_ms=settings.cache_default_ttl_ms,
        version=settings.cache_version,
    )


@lru_cache
def get_remote_data_service() -> RemoteDataService:
    settings = get_settings()
    return SupabaseRestClient(
        base_url=settings.supabase_url,
        api_key=settings.supabase_service_key,
        timeout=settings.remote_timeout_seconds,
    )


def get_local_record_store(
    store: KeyValueStore = Depends(get_key_value_store),
) -> LocalRecordStore:
    return LocalRecordStore(store, prefix=get_settings().local_record_prefix)


def get_session_store(
    store: KeyValueStore = Depends(get_key_value_store),
) -> LocalSessionStore:
    return LocalSessionStore(store, prefix=get_settings().local_record_prefix)


async def get_content_service(
    remote: RemoteDataService = Depends(get_remote_data_service),
    cache: VersionedTTLCache = Depends(get_cache),
) -> AsyncGenerator[ConferenceContentService, None]:
    """Provides the cached speakers, sessions and events readers."""
    yield ConferenceContentService(remote, cache)


async def get_registration_service(
    remote: RemoteDataService = Depends(get_remote_data_service),
    local_records: LocalRecordStore = Depends(get_local_record_store),
    sessions: LocalSessionStore = Depends(get_session_store),
    content: ConferenceContentService = Depends(get_content_service),
) -> AsyncGenerator[RegistrationService, None]:
    """Provides a RegistrationService that falls back to local storage."""
    records = FallbackRecordStore(RemoteRecordStore(remote), local_records)
    yield RegistrationService(records, sessions, speakers=content.speakers)


async def get_event_registration_service(
    remote: RemoteDataService = Depends(get_remote_data_service),
) -> AsyncGenerator[EventRegistrationService, None]:
    yield EventRegistrationService(remote)


async def get_user_service(
    remote: RemoteDataService = Depends(get_remote_data_service),
) -> AsyncGenerator[UserService, None]:
    yield UserService(remote)
