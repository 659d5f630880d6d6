from .speaker import SocialLinksSchema, SpeakerCreate, SpeakerResponse, SpeakerUpdate
from .content import (
    CacheEntryInfo,
    CacheInfoResponse,
    EventCreate,
    EventResponse,
    EventUpdate,
    OrganizerSchema,
    SessionResponse,
)
from .registration import (
    BaseRegistrationForm,
    FanRegistrationForm,
    SpeakerRegistrationForm,
    PartnerRegistrationForm,
    SponsorRegistrationForm,
    UserResponse,
    EventRegistrationCreate,
    EventRegistrationCancel,
    EventRegistrationResponse,
)
from .user import UserUpdate

__all__ = [
    "SocialLinksSchema",
    "SpeakerCreate",
    "SpeakerResponse",
    "SpeakerUpdate",
    "CacheEntryInfo",
    "CacheInfoResponse",
    "EventCreate",
    "EventResponse",
    "EventUpdate",
    "OrganizerSchema",
    "SessionResponse",
    "BaseRegistrationForm",
    "FanRegistrationForm",
    "SpeakerRegistrationForm",
    "PartnerRegistrationForm",
    "SponsorRegistrationForm",
    "UserResponse",
    "UserUpdate",
    "EventRegistrationCreate",
    "EventRegistrationCancel",
    "EventRegistrationResponse",
]
