"""Domain entity for conference users: attendees (fans), speakers, partners and sponsors."""

from dataclasses import dataclass, field
from enum import Enum


class UserRole(str, Enum):
    """Registration roles. Each role owns one optional profile sub-object."""

    FAN = "fan"
    SPEAKER = "speaker"
    PARTNER = "partner"
    SPONSOR = "sponsor"
    ADMIN = "admin"


class PartnershipType(str, Enum):
    TECHNOLOGY = "technology"
    SERVICE = "service"
    INTEGRATION = "integration"
    COMMUNITY = "community"


class SponsorshipTier(str, Enum):
    PLATINUM = "platinum"
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"
    COMMUNITY = "community"


@dataclass
class SocialLinks:
    twitter: str | None = None
    linkedin: str | None = None
    website: str | None = None


@dataclass
class Preferences:
    notifications: bool = True
    theme: str = "system"


@dataclass
class FanProfile:
    """Attendee profile with optional speaking interest."""

    interested_in_speaking: bool = False
    available_for_networking: bool = True
    bio: str | None = None
    speaking_experience: str | None = None  # none | beginner | intermediate | expert
    expertise: list[str] = field(default_factory=list)
    session_topics: list[str] = field(default_factory=list)
    hubspot_experience: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    social: SocialLinks = field(default_factory=SocialLinks)


@dataclass
class SpeakerProfile:
    bio: str
    expertise: list[str] = field(default_factory=list)
    social: SocialLinks = field(default_factory=SocialLinks)
    available_for_networking: bool = True
    session_preferences: list[str] = field(default_factory=list)


@dataclass
class PartnerProfile:
    company_description: str
    partnership_type: PartnershipType
    website: str
    offerings: list[str] = field(default_factory=list)
    logo: str | None = None
    interested_in_speaking: bool = False


@dataclass
class SponsorProfile:
    company_description: str
    sponsorship_tier: SponsorshipTier
    website: str
    marketing_goals: list[str] = field(default_factory=list)
    logo: str | None = None
    booth_requirements: str | None = None
    interested_in_speaking: bool = False


@dataclass
class User:
    """A registered conference user.

    ``id`` is remote-assigned (UUID-shaped) or locally synthesized
    (``<prefix>_<epoch millis>``) when the hosted database was unreachable
    at registration time. Timestamps are ISO-8601 strings as returned by
    the hosted database.
    """

    id: str
    email: str
    full_name: str
    created_at: str
    updated_at: str
    role: UserRole = UserRole.FAN
    company: str | None = None
    job_title: str | None = None
    phone: str | None = None
    avatar: str | None = None
    preferences: Preferences = field(default_factory=Preferences)
    fan_profile: FanProfile | None = None
    speaker_profile: SpeakerProfile | None = None
    partner_profile: PartnerProfile | None = None
    sponsor_profile: SponsorProfile | None = None
