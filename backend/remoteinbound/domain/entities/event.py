"""Domain entity for conference events."""

from dataclasses import dataclass, field
from enum import Enum


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    LIVE = "live"
    ENDED = "ended"


@dataclass
class Organizer:
    name: str
    email: str
    avatar: str | None = None


@dataclass
class Event:
    """A scheduled conference event."""

    id: str
    title: str
    description: str
    start_date: str
    end_date: str
    timezone: str
    organizer: Organizer
    status: EventStatus = EventStatus.UPCOMING
    cover_image: str | None = None
    max_attendees: int | None = None
    current_attendees: int = 0
    tags: list[str] = field(default_factory=list)

    @property
    def is_full(self) -> bool:
        return self.max_attendees is not None and self.current_attendees >= self.max_attendees
