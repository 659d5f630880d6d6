"""Domain entity for a user's registration to an event."""

from dataclasses import dataclass
from enum import Enum


class AttendanceType(str, Enum):
    VIRTUAL = "virtual"
    IN_PERSON = "in_person"


class RegistrationStatus(str, Enum):
    REGISTERED = "registered"
    CANCELLED = "cancelled"


@dataclass
class Registration:
    id: str
    user_id: str
    event_id: str
    type: AttendanceType = AttendanceType.VIRTUAL
    status: RegistrationStatus = RegistrationStatus.REGISTERED
    created_at: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == RegistrationStatus.REGISTERED
