from .user import (
    User,
    UserRole,
    Preferences,
    SocialLinks,
    FanProfile,
    SpeakerProfile,
    PartnerProfile,
    PartnershipType,
    SponsorProfile,
    SponsorshipTier,
)
from .event import Event, EventStatus, Organizer
from .speaker import Speaker
from .session import Session
from .registration import Registration, AttendanceType, RegistrationStatus

__all__ = [
    "User",
    "UserRole",
    "Preferences",
    "SocialLinks",
    "FanProfile",
    "SpeakerProfile",
    "PartnerProfile",
    "PartnershipType",
    "SponsorProfile",
    "SponsorshipTier",
    "Event",
    "EventStatus",
    "Organizer",
    "Speaker",
    "Session",
    "Registration",
    "AttendanceType",
    "RegistrationStatus",
]
