"""Schemas for sessions, events and the cache diagnostics endpoint."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from remoteinbound.domain.entities import EventStatus


class SessionResponse(BaseModel):
    id: str
    title: str
    description: str
    start_time: str | None
    end_time: str | None
    type: str
    track: str
    level: str | None
    room: str | None
    speaker_ids: list[str]
    stream_url: str | None
    recording_url: str | None
    max_attendees: int | None
    current_attendees: int
    tags: list[str]
    duration_minutes: int | None

    model_config = {"from_attributes": True}


class OrganizerSchema(BaseModel):
    name: str
    email: str
    avatar: str | None = None

    model_config = {"from_attributes": True}


class EventCreate(BaseModel):
    """Schema for publishing a new event."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    start_date: datetime
    end_date: datetime
    timezone: str = Field("UTC", min_length=1, max_length=50)
    status: EventStatus = EventStatus.UPCOMING
    cover_image: str | None = None
    max_attendees: int | None = Field(None, gt=0)
    current_attendees: int = Field(0, ge=0)
    tags: list[str] = Field(default_factory=list, max_length=10)
    organizer: OrganizerSchema


class EventUpdate(BaseModel):
    """Partial event update; omitted fields keep their stored value."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=2000)
    start_date: datetime | None = None
    end_date: datetime | None = None
    timezone: str | None = Field(None, min_length=1, max_length=50)
    status: EventStatus | None = None
    cover_image: str | None = None
    max_attendees: int | None = Field(None, gt=0)
    current_attendees: int | None = Field(None, ge=0)
    tags: list[str] | None = Field(None, max_length=10)
    organizer: OrganizerSchema | None = None


class EventResponse(BaseModel):
    id: str
    title: str
    description: str
    start_date: str
    end_date: str
    timezone: str
    status: EventStatus
    cover_image: str | None
    max_attendees: int | None
    current_attendees: int
    tags: list[str]
    organizer: OrganizerSchema
    is_full: bool

    model_config = {"from_attributes": True}


class CacheEntryInfo(BaseModel):
    size: int
    timestamp: int
    version: str


class CacheInfoResponse(BaseModel):
    entries: dict[str, CacheEntryInfo]
    stats: dict[str, Any]
    available: bool
