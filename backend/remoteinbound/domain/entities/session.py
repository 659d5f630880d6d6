"""Domain entity for agenda sessions (talks, workshops, panels)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Session:
    """A single agenda slot.

    ``track`` and ``type`` fall back to values derived from ``tags`` when the
    hosted row does not carry them explicitly.
    """

    id: str
    title: str
    description: str
    start_time: str | None = None
    end_time: str | None = None
    type: str = "Session"
    track: str = "General"
    level: str | None = None
    room: str | None = None
    speaker_ids: list[str] = field(default_factory=list)
    stream_url: str | None = None
    recording_url: str | None = None
    max_attendees: int | None = None
    current_attendees: int = 0
    tags: list[str] = field(default_factory=list)

    @property
    def duration_minutes(self) -> int | None:
        """Length of the session in whole minutes, if both ends are known."""
        if not self.start_time or not self.end_time:
            return None
        start = datetime.fromisoformat(self.start_time.replace("Z", "+00:00"))
        end = datetime.fromisoformat(self.end_time.replace("Z", "+00:00"))
        return round((end - start).total_seconds() / 60)
