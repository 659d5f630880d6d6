"""Cached access to the conference collections (sessions, speakers, events).

Reads go cache-first: a hit returns without touching the network, a miss
fetches from the hosted database and stores the *raw* rows before mapping
them to entities. Remote read errors reach the caller unchanged.

Writes go straight to the hosted database and then drop every cached list
of the collection. The key/value store behind the cache is synchronous,
so cache calls run in a worker thread to keep the event loop free.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from remoteinbound.application.interfaces import RemoteDataService
from remoteinbound.application.schemas.content import EventCreate, EventUpdate
from remoteinbound.application.schemas.speaker import SpeakerCreate, SpeakerUpdate
from remoteinbound.application.services.cache import (
    CacheKeys,
    CacheTTL,
    VersionedTTLCache,
    build_cache_key,
)
from remoteinbound.application.services.row_mappers import (
    event_from_row,
    session_from_row,
    speaker_from_row,
)
from remoteinbound.domain.entities import Event, Session, Speaker
from remoteinbound.domain.exceptions import DuplicateEntityError, RegistrationValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")
Row = dict[str, Any]


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class CachedResourceReader(Generic[T]):
    """Cache-aware reader for one remote collection.

    Args:
        resource: Remote table name, also used as the cache key root.
        remote: Hosted database port.
        cache: Shared versioned cache.
        transform: Maps one raw row to a domain entity.
        ttl_ms: Per-entry TTL for this collection; None uses the cache default.
    """

    def __init__(
        self,
        resource: str,
        remote: RemoteDataService,
        cache: VersionedTTLCache,
        transform: Callable[[Row], T],
        *,
        ttl_ms: int | None = None,
    ):
        self._resource = resource
        self._remote = remote
        self._cache = cache
        self._transform = transform
        self._ttl_ms = ttl_ms

    @property
    def resource(self) -> str:
        return self._resource

    async def get_all(
        self,
        filters: Mapping[str, Any] | None = None,
        use_cache: bool = True,
    ) -> list[T]:
        """List the collection, serving from cache when allowed and fresh."""
        key = build_cache_key(self._resource, filters)
        active_filters = {k: v for k, v in (filters or {}).items() if v is not None}

        if use_cache:
            cached = await asyncio.to_thread(self._cache.get, key)
            if cached is not None:
                logger.debug("Cache hit for %s", key)
                return self._select([self._transform(row) for row in cached], active_filters)

        rows = await self._fetch(active_filters)

        if use_cache:
            await asyncio.to_thread(self._cache.set, key, rows, self._ttl_ms)

        return self._select([self._transform(row) for row in rows], active_filters)

    async def _fetch(self, filters: dict[str, Any]) -> list[Row]:
        """Load raw rows for ``filters``; subclasses translate filters the remote cannot apply."""
        return await self._remote.list_entities(self._resource, filters or None)

    def _select(self, entities: list[T], filters: dict[str, Any]) -> list[T]:
        """Filter mapped entities on derived fields. The default keeps everything."""
        return entities

    async def get_by_id(self, entity_id: str) -> T | None:
        """Find one entity, scanning the cached unfiltered list before going remote."""
        cached = await asyncio.to_thread(self._cache.get, self._resource)
        if cached is not None:
            for row in cached:
                if str(row.get("id")) == entity_id:
                    return self._transform(row)

        row = await self._remote.get_entity(self._resource, entity_id)
        if row is None:
            return None
        return self._transform(row)

    def invalidate(self) -> None:
        """Drop every cached list of this collection, filtered or not."""
        self._cache.remove_resource(self._resource)

    # ── Writes ──

    async def _create(self, payload: Row) -> T:
        row = await self._remote.create_entity(self._resource, payload)
        await asyncio.to_thread(self.invalidate)
        logger.info("Created %s %s", self._resource, row.get("id"))
        return self._transform(row)

    async def _update(self, entity_id: str, changes: Row) -> T | None:
        """Patch one row; returns None, leaving the cache alone, when it does not exist."""
        row = await self._remote.update_entity(
            self._resource, entity_id, {**changes, "updated_at": _utc_timestamp()}
        )
        if row is None:
            return None
        await asyncio.to_thread(self.invalidate)
        logger.info("Updated %s %s", self._resource, entity_id)
        return self._transform(row)

    async def _delete(self, entity_id: str) -> bool:
        deleted = await self._remote.delete_entity(self._resource, entity_id)
        if deleted:
            await asyncio.to_thread(self.invalidate)
            logger.info("Deleted %s %s", self._resource, entity_id)
        return deleted


def _strip_text(row: Row) -> Row:
    return {k: v.strip() if isinstance(v, str) else v for k, v in row.items()}


class SpeakerService(CachedResourceReader[Speaker]):
    """Speakers listing plus remote-only speaker publishing and editing."""

    def __init__(self, remote: RemoteDataService, cache: VersionedTTLCache):
        super().__init__(
            CacheKeys.SPEAKERS, remote, cache, speaker_from_row, ttl_ms=CacheTTL.LONG
        )

    async def create_speaker(self, data: SpeakerCreate) -> Speaker:
        """Insert a speaker remotely; the cached lists are dropped on success."""
        payload: Row = {
            "name": data.name.strip(),
            "title": data.title.strip(),
            "company": data.company.strip(),
            "bio": data.bio.strip(),
            "avatar": data.avatar,
            "social_twitter": data.social.twitter if data.social else None,
            "social_linkedin": data.social.linkedin if data.social else None,
            "social_website": data.social.website if data.social else None,
            "sessions": list(data.sessions),
        }
        return await self._create(payload)

    async def update_speaker(self, speaker_id: str, data: SpeakerUpdate) -> Speaker | None:
        """Apply the fields set on ``data``. Returns None if the speaker does not exist."""
        changes = data.model_dump(exclude_none=True, exclude={"social"})
        if data.social is not None:
            changes["social_twitter"] = data.social.twitter
            changes["social_linkedin"] = data.social.linkedin
            changes["social_website"] = data.social.website
        return await self._update(speaker_id, _strip_text(changes))

    async def delete_speaker(self, speaker_id: str) -> bool:
        return await self._delete(speaker_id)


class SessionService(CachedResourceReader[Session]):
    """Agenda sessions; filter combinations are cached in separate slots.

    Supported filters: ``search`` (title or description), ``level``,
    ``track`` and ``type``. Track and type are derived from tags, so they
    are applied after mapping rather than by the remote query. The
    "All ..." values the agenda dropdowns send mean no filter.
    """

    SEARCH_FIELDS = ("title", "description")
    _MATCH_ALL = {"All Levels", "All Tracks", "All Types"}

    def __init__(self, remote: RemoteDataService, cache: VersionedTTLCache):
        super().__init__(
            CacheKeys.SESSIONS, remote, cache, session_from_row, ttl_ms=CacheTTL.MEDIUM
        )

    def _wanted(self, filters: dict[str, Any], name: str) -> Any:
        value = filters.get(name)
        if value in (None, "") or value in self._MATCH_ALL:
            return None
        return value

    async def _fetch(self, filters: dict[str, Any]) -> list[Row]:
        remote_filters = {}
        level = self._wanted(filters, "level")
        if level is not None:
            remote_filters["session_level"] = level
        return await self._remote.list_entities(
            self._resource,
            remote_filters or None,
            search=self._wanted(filters, "search"),
            search_fields=self.SEARCH_FIELDS,
        )

    def _select(self, entities: list[Session], filters: dict[str, Any]) -> list[Session]:
        track = self._wanted(filters, "track")
        session_type = self._wanted(filters, "type")
        return [
            s
            for s in entities
            if (track is None or s.track == track)
            and (session_type is None or s.type == session_type)
        ]


def _check_event_dates(start: datetime | None, end: datetime | None) -> None:
    if start is not None and end is not None and end <= start:
        raise RegistrationValidationError({"end_date": "End date must be after start date"})


def _organizer_columns(organizer: Any) -> Row:
    return {
        "organizer_name": organizer.name.strip(),
        "organizer_email": organizer.email.strip(),
        "organizer_avatar": organizer.avatar,
    }


class EventService(CachedResourceReader[Event]):
    def __init__(self, remote: RemoteDataService, cache: VersionedTTLCache):
        super().__init__(
            CacheKeys.EVENTS, remote, cache, event_from_row, ttl_ms=CacheTTL.MEDIUM
        )

    async def create_event(self, data: EventCreate) -> Event:
        """Insert an event remotely.

        Raises:
            RegistrationValidationError: If the event ends before it starts.
            DuplicateEntityError: If an event with the same title and start exists.
        """
        _check_event_dates(data.start_date, data.end_date)
        title = data.title.strip()
        start_date = data.start_date.isoformat()

        clashes = await self._remote.list_entities(
            self._resource, {"title": title, "start_date": start_date}
        )
        if clashes:
            raise DuplicateEntityError(
                "Event",
                "title",
                title,
                message="An event with the same title and start date already exists",
            )

        payload: Row = {
            "title": title,
            "description": data.description.strip(),
            "start_date": start_date,
            "end_date": data.end_date.isoformat(),
            "timezone": data.timezone,
            "status": data.status.value,
            "cover_image": data.cover_image,
            "max_attendees": data.max_attendees,
            "current_attendees": data.current_attendees,
            "tags": list(data.tags),
            **_organizer_columns(data.organizer),
        }
        return await self._create(payload)

    async def update_event(self, event_id: str, data: EventUpdate) -> Event | None:
        """Apply the fields set on ``data``. Returns None if the event does not exist."""
        _check_event_dates(data.start_date, data.end_date)
        changes = data.model_dump(
            mode="json", exclude_none=True, exclude={"organizer", "start_date", "end_date"}
        )
        if data.start_date is not None:
            changes["start_date"] = data.start_date.isoformat()
        if data.end_date is not None:
            changes["end_date"] = data.end_date.isoformat()
        if data.organizer is not None:
            changes.update(_organizer_columns(data.organizer))
        return await self._update(event_id, _strip_text(changes))

    async def delete_event(self, event_id: str) -> bool:
        return await self._delete(event_id)


class ConferenceContentService:
    """Groups the collection readers behind one object for the API layer."""

    def __init__(self, remote: RemoteDataService, cache: VersionedTTLCache):
        self._cache = cache
        self.speakers = SpeakerService(remote, cache)
        self.sessions = SessionService(remote, cache)
        self.events = EventService(remote, cache)

    async def preload_data(self, use_cache: bool = True) -> dict[str, list[Any]]:
        """Warm the cache with the unfiltered session and speaker lists."""
        sessions, speakers = await asyncio.gather(
            self.sessions.get_all(use_cache=use_cache),
            self.speakers.get_all(use_cache=use_cache),
        )
        return {"sessions": sessions, "speakers": speakers}

    def clear_content_cache(self) -> None:
        """Drop cached sessions, speakers and events, including filtered lists."""
        for reader in (self.sessions, self.speakers, self.events):
            reader.invalidate()
