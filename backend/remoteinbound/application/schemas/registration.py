"""Pydantic DTOs for the registration forms and the user records they produce.

Form fields are plain strings with empty defaults. The registration service
applies the form rules and reports every problem per field in one pass.
"""

from pydantic import BaseModel, Field

from remoteinbound.domain.entities import (
    AttendanceType,
    PartnershipType,
    RegistrationStatus,
    SponsorshipTier,
    UserRole,
)

from .speaker import SocialLinksSchema


class BaseRegistrationForm(BaseModel):
    """Fields shared by every registration form."""

    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    phone: str = ""
    agree_to_terms: bool = False
    subscribe_newsletter: bool = True


class FanRegistrationForm(BaseRegistrationForm):
    interested_in_speaking: bool = False
    available_for_networking: bool = True
    interests: list[str] = Field(default_factory=list)
    hubspot_experience: list[str] = Field(default_factory=list)


class SpeakerRegistrationForm(BaseRegistrationForm):
    company: str = ""
    job_title: str = ""
    bio: str = ""
    expertise: list[str] = Field(default_factory=list)
    twitter: str = ""
    linkedin: str = ""
    website: str = ""
    available_for_networking: bool = True
    session_preferences: list[str] = Field(default_factory=list)


class PartnerRegistrationForm(BaseRegistrationForm):
    company: str = ""
    job_title: str = ""
    company_description: str = ""
    partnership_type: str = PartnershipType.TECHNOLOGY.value
    website: str = ""
    offerings: list[str] = Field(default_factory=list)
    interested_in_speaking: bool = False


class SponsorRegistrationForm(BaseRegistrationForm):
    company: str = ""
    job_title: str = ""
    company_description: str = ""
    sponsorship_tier: str = SponsorshipTier.BRONZE.value
    website: str = ""
    marketing_goals: list[str] = Field(default_factory=list)
    booth_requirements: str = ""
    interested_in_speaking: bool = False


# ── Responses ───────────────────────────────────────────────────────


class PreferencesSchema(BaseModel):
    notifications: bool
    theme: str

    model_config = {"from_attributes": True}


class FanProfileSchema(BaseModel):
    interested_in_speaking: bool
    available_for_networking: bool
    bio: str | None = None
    speaking_experience: str | None = None
    expertise: list[str] = Field(default_factory=list)
    session_topics: list[str] = Field(default_factory=list)
    hubspot_experience: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    social: SocialLinksSchema

    model_config = {"from_attributes": True}


class SpeakerProfileSchema(BaseModel):
    bio: str
    expertise: list[str]
    social: SocialLinksSchema
    available_for_networking: bool
    session_preferences: list[str]

    model_config = {"from_attributes": True}


class PartnerProfileSchema(BaseModel):
    company_description: str
    partnership_type: PartnershipType
    website: str
    offerings: list[str]
    logo: str | None = None
    interested_in_speaking: bool

    model_config = {"from_attributes": True}


class SponsorProfileSchema(BaseModel):
    company_description: str
    sponsorship_tier: SponsorshipTier
    website: str
    marketing_goals: list[str]
    logo: str | None = None
    booth_requirements: str | None = None
    interested_in_speaking: bool

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    """Schema returned after a registration, whichever store accepted it."""

    id: str
    email: str
    full_name: str
    role: UserRole
    company: str | None
    job_title: str | None
    phone: str | None
    avatar: str | None
    preferences: PreferencesSchema
    fan_profile: FanProfileSchema | None
    speaker_profile: SpeakerProfileSchema | None
    partner_profile: PartnerProfileSchema | None
    sponsor_profile: SponsorProfileSchema | None
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


# ── Event registrations ─────────────────────────────────────────────


class EventRegistrationCreate(BaseModel):
    user_id: str
    event_id: str
    type: str = "virtual"


class EventRegistrationCancel(BaseModel):
    user_id: str
    event_id: str


class EventRegistrationResponse(BaseModel):
    id: str
    user_id: str
    event_id: str
    type: AttendanceType
    status: RegistrationStatus
    created_at: str | None

    model_config = {"from_attributes": True}
