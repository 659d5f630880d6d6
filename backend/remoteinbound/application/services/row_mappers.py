"""Map hosted-database rows (snake_case columns) to domain entities.

Readers cache the raw rows and run these mappers on every read, so a
mapper can change shape without invalidating what is already cached.
Rows synthesized by the local fallback store use the same column names
and go through the same mappers.
"""

from typing import Any

from remoteinbound.domain.entities import (
    AttendanceType,
    Event,
    EventStatus,
    FanProfile,
    Organizer,
    PartnerProfile,
    PartnershipType,
    Preferences,
    Registration,
    RegistrationStatus,
    Session,
    SocialLinks,
    Speaker,
    SpeakerProfile,
    SponsorProfile,
    SponsorshipTier,
    User,
    UserRole,
)

Row = dict[str, Any]

_SESSION_TYPES = ("Keynote", "Workshop", "Session", "Deep Dive")


def _social(data: Row | None) -> SocialLinks:
    data = data or {}
    return SocialLinks(
        twitter=data.get("twitter"),
        linkedin=data.get("linkedin"),
        website=data.get("website"),
    )


def _fan_profile(data: Row | None) -> FanProfile | None:
    if not data:
        return None
    return FanProfile(
        interested_in_speaking=bool(data.get("interested_in_speaking", False)),
        available_for_networking=bool(data.get("available_for_networking", True)),
        bio=data.get("bio"),
        speaking_experience=data.get("speaking_experience"),
        expertise=list(data.get("expertise") or []),
        session_topics=list(data.get("session_topics") or []),
        hubspot_experience=list(data.get("hubspot_experience") or []),
        interests=list(data.get("interests") or []),
        social=_social(data.get("social")),
    )


def _speaker_profile(data: Row | None) -> SpeakerProfile | None:
    if not data:
        return None
    return SpeakerProfile(
        bio=data.get("bio", ""),
        expertise=list(data.get("expertise") or []),
        social=_social(data.get("social")),
        available_for_networking=bool(data.get("available_for_networking", True)),
        session_preferences=list(data.get("session_preferences") or []),
    )


def _partner_profile(data: Row | None) -> PartnerProfile | None:
    if not data:
        return None
    return PartnerProfile(
        company_description=data.get("company_description", ""),
        partnership_type=PartnershipType(data.get("partnership_type", "technology")),
        website=data.get("website", ""),
        offerings=list(data.get("offerings") or []),
        logo=data.get("logo"),
        interested_in_speaking=bool(data.get("interested_in_speaking", False)),
    )


def _sponsor_profile(data: Row | None) -> SponsorProfile | None:
    if not data:
        return None
    return SponsorProfile(
        company_description=data.get("company_description", ""),
        sponsorship_tier=SponsorshipTier(data.get("sponsorship_tier", "bronze")),
        website=data.get("website", ""),
        marketing_goals=list(data.get("marketing_goals") or []),
        logo=data.get("logo"),
        booth_requirements=data.get("booth_requirements"),
        interested_in_speaking=bool(data.get("interested_in_speaking", False)),
    )


def user_from_row(row: Row) -> User:
    prefs = row.get("preferences") or {}
    return User(
        id=str(row["id"]),
        email=row["email"],
        full_name=row.get("full_name", ""),
        created_at=row.get("created_at", ""),
        updated_at=row.get("updated_at", ""),
        role=UserRole(row.get("role") or UserRole.FAN.value),
        company=row.get("company"),
        job_title=row.get("job_title"),
        phone=row.get("phone"),
        avatar=row.get("avatar"),
        preferences=Preferences(
            notifications=bool(prefs.get("notifications", True)),
            theme=prefs.get("theme", "system"),
        ),
        fan_profile=_fan_profile(row.get("fan_profile")),
        speaker_profile=_speaker_profile(row.get("speaker_profile")),
        partner_profile=_partner_profile(row.get("partner_profile")),
        sponsor_profile=_sponsor_profile(row.get("sponsor_profile")),
    )


def event_from_row(row: Row) -> Event:
    return Event(
        id=str(row["id"]),
        title=row.get("title", ""),
        description=row.get("description", ""),
        start_date=row.get("start_date", ""),
        end_date=row.get("end_date", ""),
        timezone=row.get("timezone", "UTC"),
        status=EventStatus(row.get("status") or EventStatus.UPCOMING.value),
        cover_image=row.get("cover_image"),
        max_attendees=row.get("max_attendees"),
        current_attendees=row.get("current_attendees") or 0,
        tags=list(row.get("tags") or []),
        organizer=Organizer(
            name=row.get("organizer_name", ""),
            email=row.get("organizer_email", ""),
            avatar=row.get("organizer_avatar"),
        ),
    )


def speaker_from_row(row: Row) -> Speaker:
    return Speaker(
        id=str(row["id"]),
        name=row.get("name", ""),
        title=row.get("title", ""),
        company=row.get("company", ""),
        bio=row.get("bio", ""),
        avatar=row.get("avatar"),
        social=SocialLinks(
            twitter=row.get("social_twitter"),
            linkedin=row.get("social_linkedin"),
            website=row.get("social_website"),
        ),
        sessions=list(row.get("sessions") or []),
    )


def session_from_row(row: Row) -> Session:
    tags = list(row.get("tags") or [])
    derived_type = next((t for t in tags if t in _SESSION_TYPES), "Session")
    return Session(
        id=str(row["id"]),
        title=row.get("title", ""),
        description=row.get("description", ""),
        start_time=row.get("start_time"),
        end_time=row.get("end_time"),
        type=row.get("type") or derived_type,
        track=row.get("track") or (tags[0] if tags else "General"),
        level=row.get("session_level") or row.get("level"),
        room=row.get("room"),
        speaker_ids=list(row.get("speaker_ids") or []),
        stream_url=row.get("stream_url"),
        recording_url=row.get("recording_url"),
        max_attendees=row.get("max_attendees"),
        current_attendees=row.get("current_attendees") or 0,
        tags=tags,
    )


def registration_from_row(row: Row) -> Registration:
    return Registration(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        event_id=str(row["event_id"]),
        type=AttendanceType(row.get("registration_type") or AttendanceType.VIRTUAL.value),
        status=RegistrationStatus(row.get("status") or RegistrationStatus.REGISTERED.value),
        created_at=row.get("created_at"),
    )
