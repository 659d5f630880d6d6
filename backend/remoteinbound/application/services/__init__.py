from .cache import CacheEntry, CacheKeys, CacheTTL, VersionedTTLCache, build_cache_key
from .data_access import (
    CachedResourceReader,
    ConferenceContentService,
    EventService,
    SessionService,
    SpeakerService,
)
from .record_stores import FallbackRecordStore, RemoteRecordStore
from .registration_service import RegistrationService
from .event_registration_service import EventRegistrationService
from .user_service import UserService

__all__ = [
    "CacheEntry",
    "CacheKeys",
    "CacheTTL",
    "VersionedTTLCache",
    "build_cache_key",
    "CachedResourceReader",
    "ConferenceContentService",
    "EventService",
    "SessionService",
    "SpeakerService",
    "FallbackRecordStore",
    "RemoteRecordStore",
    "RegistrationService",
    "EventRegistrationService",
    "UserService",
]
