"""Unit tests for the cached readers (speakers, sessions, events)."""

import threading

import pytest

from remoteinbound.application.schemas import (
    EventCreate,
    EventUpdate,
    SocialLinksSchema,
    SpeakerCreate,
    SpeakerUpdate,
)
from remoteinbound.application.services import (
    CachedResourceReader,
    ConferenceContentService,
    VersionedTTLCache,
    build_cache_key,
)
from remoteinbound.application.services.row_mappers import speaker_from_row
from remoteinbound.domain.exceptions import (
    DuplicateEntityError,
    RegistrationValidationError,
    RemoteServiceError,
)
from remoteinbound.infrastructure.storage import InMemoryKeyValueStore


SPEAKER_ROWS = [
    {
        "id": "sp-1",
        "name": "Ada Lovelace",
        "title": "Engineer",
        "company": "Analytical",
        "bio": "First programmer.",
        "social_twitter": "@ada",
        "sessions": ["s-1"],
    },
    {"id": "sp-2", "name": "Grace Hopper", "title": "Admiral", "company": "Navy", "bio": "COBOL."},
]

SESSION_ROWS = [
    {
        "id": "s-1",
        "title": "Opening Keynote",
        "description": "Welcome to the conference",
        "start_time": "2024-09-03T09:00:00+00:00",
        "end_time": "2024-09-03T10:00:00+00:00",
        "tags": ["Marketing", "Keynote"],
        "session_level": "Beginner",
    },
    {
        "id": "s-2",
        "title": "CRM Workshop",
        "description": "Hands-on pipelines",
        "tags": ["Sales", "Workshop"],
        "session_level": "Advanced",
    },
    {"id": "s-3", "title": "Ops Deep Dive", "description": "Automation", "tags": []},
]


@pytest.fixture
def content(remote, cache) -> ConferenceContentService:
    remote.tables["speakers"] = [dict(r) for r in SPEAKER_ROWS]
    remote.tables["sessions"] = [dict(r) for r in SESSION_ROWS]
    remote.tables["events"] = []
    return ConferenceContentService(remote, cache)


# ── Read path ──


@pytest.mark.asyncio
async def test_miss_fetches_once_and_caches_raw_rows(remote, cache):
    remote.tables["speakers"] = [dict(r) for r in SPEAKER_ROWS]
    reader = CachedResourceReader("speakers", remote, cache, speaker_from_row)

    first = await reader.get_all()
    assert len(remote.calls_of("list")) == 1
    assert cache.get("speakers") == SPEAKER_ROWS

    second = await reader.get_all()
    assert len(remote.calls_of("list")) == 1
    assert second == first


@pytest.mark.asyncio
async def test_use_cache_false_always_goes_remote(remote, cache):
    remote.tables["speakers"] = [dict(r) for r in SPEAKER_ROWS]
    reader = CachedResourceReader("speakers", remote, cache, speaker_from_row)

    await reader.get_all(use_cache=False)
    await reader.get_all(use_cache=False)

    assert len(remote.calls_of("list")) == 2
    assert cache.get("speakers") is None


@pytest.mark.asyncio
async def test_rows_are_transformed(content):
    speakers = await content.speakers.get_all()
    ada = speakers[0]
    assert ada.name == "Ada Lovelace"
    assert ada.social.twitter == "@ada"
    assert ada.sessions == ["s-1"]


@pytest.mark.asyncio
async def test_remote_failure_propagates_and_caches_nothing(content, remote, cache):
    remote.fail = True
    with pytest.raises(RemoteServiceError):
        await content.speakers.get_all()
    assert cache.keys() == []


@pytest.mark.asyncio
async def test_empty_collection_is_cached_as_empty_list(content, remote, cache):
    assert await content.events.get_all() == []
    assert cache.get("events") == []
    assert await content.events.get_all() == []
    assert len(remote.calls_of("list")) == 1


@pytest.mark.asyncio
async def test_expired_entry_triggers_refetch(content, remote, clock):
    await content.speakers.get_all()
    clock.advance(10 * 60 * 60 * 1000 + 1)
    await content.speakers.get_all()
    assert len(remote.calls_of("list")) == 2


# ── Sessions and filters ──


@pytest.mark.asyncio
async def test_session_type_and_track_derived_from_tags(content):
    sessions = {s.id: s for s in await content.sessions.get_all()}
    assert sessions["s-1"].type == "Keynote"
    assert sessions["s-1"].track == "Marketing"
    assert sessions["s-1"].level == "Beginner"
    assert sessions["s-1"].duration_minutes == 60
    assert sessions["s-3"].type == "Session"
    assert sessions["s-3"].track == "General"


@pytest.mark.asyncio
async def test_session_filters_cached_separately(content, remote, cache):
    workshops = await content.sessions.get_all({"type": "Workshop"})
    sales = await content.sessions.get_all({"track": "Sales"})

    assert [s.id for s in workshops] == ["s-2"]
    assert [s.id for s in sales] == ["s-2"]
    assert cache.get(build_cache_key("sessions", {"type": "Workshop"})) is not None
    assert cache.get(build_cache_key("sessions", {"track": "Sales"})) is not None
    assert len(remote.calls_of("list")) == 2


@pytest.mark.asyncio
async def test_session_search_and_level_go_to_remote(content, remote):
    found = await content.sessions.get_all({"search": "crm"})
    assert [s.id for s in found] == ["s-2"]

    await content.sessions.get_all({"level": "Advanced"})
    assert remote.calls_of("list")[-1][2] == {"session_level": "Advanced"}


@pytest.mark.asyncio
async def test_match_all_values_are_not_filters(content):
    sessions = await content.sessions.get_all({"track": "All Tracks", "level": "All Levels"})
    assert len(sessions) == 3


# ── Point lookups ──


@pytest.mark.asyncio
async def test_get_by_id_uses_cached_list(content, remote):
    await content.speakers.get_all()
    speaker = await content.speakers.get_by_id("sp-2")
    assert speaker.name == "Grace Hopper"
    assert remote.calls_of("get") == []


@pytest.mark.asyncio
async def test_get_by_id_falls_back_to_remote(content, remote):
    speaker = await content.speakers.get_by_id("sp-1")
    assert speaker.name == "Ada Lovelace"
    assert len(remote.calls_of("get")) == 1


@pytest.mark.asyncio
async def test_get_by_id_not_found_returns_none(content):
    assert await content.events.get_by_id("missing") is None


# ── Writes and invalidation ──


@pytest.mark.asyncio
async def test_create_speaker_invalidates_cached_lists(content, remote, cache):
    await content.speakers.get_all()
    assert cache.get("speakers") is not None

    created = await content.speakers.create_speaker(
        SpeakerCreate(
            name=" Katherine Johnson ",
            title="Mathematician",
            company="NASA",
            bio="Orbital mechanics.",
            social=SocialLinksSchema(linkedin="kjohnson"),
        )
    )

    assert created.name == "Katherine Johnson"
    assert created.social.linkedin == "kjohnson"
    assert cache.get("speakers") is None
    assert len(await content.speakers.get_all()) == 3


@pytest.mark.asyncio
async def test_create_speaker_has_no_fallback(content, remote):
    remote.fail = True
    with pytest.raises(RemoteServiceError):
        await content.speakers.create_speaker(
            SpeakerCreate(name="X", title="Y", company="Z", bio="B")
        )


@pytest.mark.asyncio
async def test_preload_and_clear_content_cache(content, cache):
    data = await content.preload_data()
    assert len(data["sessions"]) == 3
    assert len(data["speakers"]) == 2

    await content.sessions.get_all({"track": "Sales"})
    cache.set("user_preferences", {"theme": "dark"})

    content.clear_content_cache()

    assert cache.keys() == ["user_preferences"]


@pytest.mark.asyncio
async def test_update_speaker_patches_set_fields_and_invalidates(content, remote, cache):
    await content.speakers.get_all()
    await content.speakers.get_all({"company": "Navy"})

    updated = await content.speakers.update_speaker(
        "sp-2", SpeakerUpdate(title=" Rear Admiral ", social=SocialLinksSchema(twitter="@grace"))
    )

    assert updated.title == "Rear Admiral"
    assert updated.name == "Grace Hopper"
    assert updated.social.twitter == "@grace"
    _, _, (entity_id, changes) = remote.calls_of("update")[0]
    assert entity_id == "sp-2"
    assert set(changes) == {
        "title", "social_twitter", "social_linkedin", "social_website", "updated_at"
    }
    assert cache.keys() == []


@pytest.mark.asyncio
async def test_update_missing_speaker_returns_none_and_keeps_cache(content, cache):
    await content.speakers.get_all()

    assert await content.speakers.update_speaker("nope", SpeakerUpdate(name="X")) is None
    assert cache.get("speakers") is not None


@pytest.mark.asyncio
async def test_delete_speaker(content, remote, cache):
    await content.speakers.get_all()

    assert await content.speakers.delete_speaker("sp-1") is True
    assert cache.get("speakers") is None
    assert [s.id for s in await content.speakers.get_all()] == ["sp-2"]
    assert await content.speakers.delete_speaker("sp-1") is False


def _event_form(**overrides) -> EventCreate:
    data = {
        "title": "INBOUND Remote",
        "description": "Virtual edition",
        "start_date": "2024-09-03T09:00:00+00:00",
        "end_date": "2024-09-05T18:00:00+00:00",
        "tags": ["Marketing"],
        "organizer": {"name": "HubSpot", "email": "events@example.com"},
    }
    data.update(overrides)
    return EventCreate(**data)


@pytest.mark.asyncio
async def test_create_event_maps_organizer_columns(content, remote, cache):
    await content.events.get_all()

    event = await content.events.create_event(_event_form())

    row = remote.tables["events"][0]
    assert row["organizer_name"] == "HubSpot"
    assert row["start_date"] == "2024-09-03T09:00:00+00:00"
    assert row["status"] == "upcoming"
    assert event.organizer.email == "events@example.com"
    assert cache.get("events") is None


@pytest.mark.asyncio
async def test_create_event_rejects_same_title_and_start(content, remote):
    await content.events.create_event(_event_form())

    with pytest.raises(DuplicateEntityError):
        await content.events.create_event(_event_form(description="Again"))

    assert len(remote.tables["events"]) == 1


@pytest.mark.asyncio
async def test_create_event_requires_end_after_start(content, remote):
    with pytest.raises(RegistrationValidationError) as exc_info:
        await content.events.create_event(_event_form(end_date="2024-09-01T00:00:00+00:00"))

    assert exc_info.value.errors == {"end_date": "End date must be after start date"}
    assert remote.calls == []


@pytest.mark.asyncio
async def test_update_event_partial(content, remote):
    created = await content.events.create_event(_event_form())

    updated = await content.events.update_event(
        created.id,
        EventUpdate(status="live", organizer={"name": "Ops", "email": "ops@example.com"}),
    )

    assert updated.status.value == "live"
    assert updated.organizer.name == "Ops"
    assert updated.title == "INBOUND Remote"


# ── Store access off the event loop ──


class ThreadRecordingStore(InMemoryKeyValueStore):
    def __init__(self):
        super().__init__()
        self.threads: set[int] = set()

    def get_item(self, key):
        self.threads.add(threading.get_ident())
        return super().get_item(key)

    def set_item(self, key, value):
        self.threads.add(threading.get_ident())
        super().set_item(key, value)


@pytest.mark.asyncio
async def test_cache_access_runs_in_worker_thread(remote, clock):
    store = ThreadRecordingStore()
    remote.tables["speakers"] = [dict(r) for r in SPEAKER_ROWS]
    service = ConferenceContentService(remote, VersionedTTLCache(store, prefix="t", clock=clock))

    await service.speakers.get_all()
    await service.speakers.get_all()

    assert store.threads
    assert threading.get_ident() not in store.threads
