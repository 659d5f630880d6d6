"""Registration use cases for fans, speakers, partners and sponsors.

Every role goes through ``create_registration_record``: validate the form,
normalize it into a ``users`` row, hand it to the fallback record store,
then sign the new user in. Which store accepted the row is decided by
``FallbackRecordStore``; this service never inspects remote errors itself.
"""

import asyncio
import logging
import re
from typing import Any

from remoteinbound.application.interfaces import SessionEstablisher
from remoteinbound.application.schemas.registration import (
    BaseRegistrationForm,
    FanRegistrationForm,
    PartnerRegistrationForm,
    SpeakerRegistrationForm,
    SponsorRegistrationForm,
)
from remoteinbound.application.services.data_access import SpeakerService
from remoteinbound.application.services.record_stores import FallbackRecordStore
from remoteinbound.application.services.row_mappers import user_from_row
from remoteinbound.domain.entities import PartnershipType, SponsorshipTier, User, UserRole
from remoteinbound.domain.exceptions import RegistrationValidationError
from remoteinbound.domain.record_ids import is_local_record_id

logger = logging.getLogger(__name__)

Row = dict[str, Any]

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REMOTE_USERS_TABLE = "users"

# role -> (local collection, local id prefix)
LOCAL_TARGETS: dict[UserRole, tuple[str, str]] = {
    UserRole.FAN: ("users", "local"),
    UserRole.SPEAKER: ("speakers", "speaker"),
    UserRole.PARTNER: ("partners", "partner"),
    UserRole.SPONSOR: ("sponsors", "sponsor"),
}

DESCRIPTION_MIN = 50
DESCRIPTION_MAX = 500


# ── Validation ──────────────────────────────────────────────────────


def _validate_common(form: BaseRegistrationForm, errors: dict[str, str]) -> None:
    if not form.name.strip():
        errors["name"] = "Name is required"

    if not form.email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.match(form.email.strip()):
        errors["email"] = "Please enter a valid email address"

    if not form.password:
        errors["password"] = "Password is required"

    if form.password != form.confirm_password:
        errors["confirm_password"] = "Passwords do not match"

    if not form.agree_to_terms:
        errors["agree_to_terms"] = "You must agree to the terms and conditions"


def _validate_business(
    form: PartnerRegistrationForm | SponsorRegistrationForm, errors: dict[str, str]
) -> None:
    if not form.company.strip():
        errors["company"] = "Company is required"
    if not form.job_title.strip():
        errors["job_title"] = "Job title is required"
    if not form.website.strip():
        errors["website"] = "Website is required"

    description = form.company_description.strip()
    if not description:
        errors["company_description"] = "Company description is required"
    elif len(description) < DESCRIPTION_MIN:
        errors["company_description"] = "Company description must be at least 50 characters"
    elif len(description) > DESCRIPTION_MAX:
        errors["company_description"] = "Company description must be less than 500 characters"


def validate_fan_form(form: FanRegistrationForm) -> dict[str, str]:
    errors: dict[str, str] = {}
    _validate_common(form, errors)

    if "name" not in errors and len(form.name.strip()) < 2:
        errors["name"] = "Name must be at least 2 characters"
    if "password" not in errors and len(form.password) < 6:
        errors["password"] = "Password must be at least 6 characters"
    if not form.confirm_password:
        errors["confirm_password"] = "Please confirm your password"
    return errors


def validate_speaker_form(form: SpeakerRegistrationForm) -> dict[str, str]:
    errors: dict[str, str] = {}
    _validate_common(form, errors)

    if not form.company.strip():
        errors["company"] = "Company is required"
    if not form.job_title.strip():
        errors["job_title"] = "Job title is required"

    bio = form.bio.strip()
    if not bio:
        errors["bio"] = "Bio is required"
    elif len(bio) < DESCRIPTION_MIN:
        errors["bio"] = "Bio must be at least 50 characters"
    elif len(bio) > DESCRIPTION_MAX:
        errors["bio"] = "Bio must be less than 500 characters"

    if not form.expertise:
        errors["expertise"] = "Please select at least one area of expertise"
    return errors


def validate_partner_form(form: PartnerRegistrationForm) -> dict[str, str]:
    errors: dict[str, str] = {}
    _validate_common(form, errors)
    _validate_business(form, errors)

    if form.partnership_type not in {t.value for t in PartnershipType}:
        errors["partnership_type"] = "Please select a valid partnership type"
    if not form.offerings:
        errors["offerings"] = "Please select at least one offering"
    return errors


def validate_sponsor_form(form: SponsorRegistrationForm) -> dict[str, str]:
    errors: dict[str, str] = {}
    _validate_common(form, errors)
    _validate_business(form, errors)

    if form.sponsorship_tier not in {t.value for t in SponsorshipTier}:
        errors["sponsorship_tier"] = "Please select a valid sponsorship tier"
    if not form.marketing_goals:
        errors["marketing_goals"] = "Please select at least one marketing goal"
    return errors


# ── Normalization ───────────────────────────────────────────────────


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _clean_list(values: list[str]) -> list[str]:
    return [v.strip() for v in values if v and v.strip()]


def _base_row(form: BaseRegistrationForm, role: UserRole) -> Row:
    return {
        "email": form.email.strip().lower(),
        "full_name": form.name.strip(),
        "role": role.value,
        "phone": _optional(form.phone),
        "avatar": None,
        "preferences": {
            "notifications": form.subscribe_newsletter,
            "theme": "system",
        },
    }


def build_fan_row(form: FanRegistrationForm) -> Row:
    row = _base_row(form, UserRole.FAN)
    row["fan_profile"] = {
        "interested_in_speaking": form.interested_in_speaking,
        "available_for_networking": form.available_for_networking,
        "expertise": [],
        "session_topics": [],
        "hubspot_experience": _clean_list(form.hubspot_experience),
        "interests": _clean_list(form.interests),
        "social": {},
    }
    return row


def build_speaker_row(form: SpeakerRegistrationForm) -> Row:
    row = _base_row(form, UserRole.SPEAKER)
    row["company"] = form.company.strip()
    row["job_title"] = form.job_title.strip()
    row["speaker_profile"] = {
        "bio": form.bio.strip(),
        "expertise": _clean_list(form.expertise),
        "social": {
            "twitter": _optional(form.twitter),
            "linkedin": _optional(form.linkedin),
            "website": _optional(form.website),
        },
        "available_for_networking": form.available_for_networking,
        "session_preferences": _clean_list(form.session_preferences),
    }
    return row


def build_partner_row(form: PartnerRegistrationForm) -> Row:
    row = _base_row(form, UserRole.PARTNER)
    row["company"] = form.company.strip()
    row["job_title"] = form.job_title.strip()
    row["partner_profile"] = {
        "company_description": form.company_description.strip(),
        "partnership_type": form.partnership_type,
        "website": form.website.strip(),
        "offerings": _clean_list(form.offerings),
        "interested_in_speaking": form.interested_in_speaking,
    }
    return row


def build_sponsor_row(form: SponsorRegistrationForm) -> Row:
    row = _base_row(form, UserRole.SPONSOR)
    row["company"] = form.company.strip()
    row["job_title"] = form.job_title.strip()
    row["sponsor_profile"] = {
        "company_description": form.company_description.strip(),
        "sponsorship_tier": form.sponsorship_tier,
        "website": form.website.strip(),
        "marketing_goals": _clean_list(form.marketing_goals),
        "booth_requirements": _optional(form.booth_requirements),
        "interested_in_speaking": form.interested_in_speaking,
    }
    return row


_HANDLERS = {
    UserRole.FAN: (validate_fan_form, build_fan_row),
    UserRole.SPEAKER: (validate_speaker_form, build_speaker_row),
    UserRole.PARTNER: (validate_partner_form, build_partner_row),
    UserRole.SPONSOR: (validate_sponsor_form, build_sponsor_row),
}


# ── Service ─────────────────────────────────────────────────────────


class RegistrationService:
    """Creates user accounts for each conference role.

    Args:
        records: Fallback-aware record store; remote first, local on failure.
        sessions: Receives each created user to sign them in.
        speakers: Optional speakers reader whose cached lists are dropped
            when a speaker account lands in the hosted database.
    """

    def __init__(
        self,
        records: FallbackRecordStore,
        sessions: SessionEstablisher,
        *,
        speakers: SpeakerService | None = None,
    ):
        self._records = records
        self._sessions = sessions
        self._speakers = speakers

    async def register_fan(self, form: FanRegistrationForm) -> User:
        return await self.create_registration_record(UserRole.FAN, form)

    async def register_speaker(self, form: SpeakerRegistrationForm) -> User:
        return await self.create_registration_record(UserRole.SPEAKER, form)

    async def register_partner(self, form: PartnerRegistrationForm) -> User:
        return await self.create_registration_record(UserRole.PARTNER, form)

    async def register_sponsor(self, form: SponsorRegistrationForm) -> User:
        return await self.create_registration_record(UserRole.SPONSOR, form)

    async def create_registration_record(
        self, role: UserRole, form: BaseRegistrationForm
    ) -> User:
        """Validate, normalize and store one registration form.

        Raises:
            RegistrationValidationError: If the form has field errors.
            DuplicateEntityError: If the email is already registered.
            ValueError: If ``role`` cannot self-register.
        """
        if role not in _HANDLERS:
            raise ValueError(f"Role '{role.value}' cannot be registered")
        validate, build_row = _HANDLERS[role]

        errors = validate(form)
        if errors:
            raise RegistrationValidationError(errors)

        local_collection, id_prefix = LOCAL_TARGETS[role]
        stored = await self._records.create_unique(
            build_row(form),
            remote_collection=REMOTE_USERS_TABLE,
            local_collection=local_collection,
            unique_field="email",
            id_prefix=id_prefix,
        )
        user = user_from_row(stored)

        if is_local_record_id(user.id):
            logger.info("Registered %s %s in local storage", role.value, user.id)
        else:
            logger.info("Registered %s %s", role.value, user.id)
            if role == UserRole.SPEAKER and self._speakers is not None:
                await asyncio.to_thread(self._speakers.invalidate)

        await asyncio.to_thread(self._sessions.establish, user)
        return user
