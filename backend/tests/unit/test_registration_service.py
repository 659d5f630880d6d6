"""Unit tests for RegistrationService across all roles."""

import pytest

from remoteinbound.application.interfaces import SessionEstablisher
from remoteinbound.application.schemas import (
    FanRegistrationForm,
    PartnerRegistrationForm,
    SpeakerRegistrationForm,
    SponsorRegistrationForm,
)
from remoteinbound.application.services import (
    FallbackRecordStore,
    RegistrationService,
    RemoteRecordStore,
    SpeakerService,
)
from remoteinbound.domain.entities import PartnershipType, User, UserRole
from remoteinbound.domain.exceptions import DuplicateEntityError, RegistrationValidationError
from remoteinbound.domain.record_ids import is_local_record_id
from remoteinbound.infrastructure.storage import LocalRecordStore

BIO = "Marketing automation lead with ten years of inbound campaign experience."
DESCRIPTION = "We build integrations that connect CRM data to every marketing channel."


class RecordingSessions(SessionEstablisher):
    def __init__(self):
        self.users: list[User] = []

    def establish(self, user: User) -> None:
        self.users.append(user)


@pytest.fixture
def sessions() -> RecordingSessions:
    return RecordingSessions()


@pytest.fixture
def local(kv_store) -> LocalRecordStore:
    return LocalRecordStore(kv_store)


@pytest.fixture
def speakers(remote, cache) -> SpeakerService:
    return SpeakerService(remote, cache)


@pytest.fixture
def service(remote, local, sessions, speakers) -> RegistrationService:
    records = FallbackRecordStore(RemoteRecordStore(remote), local)
    return RegistrationService(records, sessions, speakers=speakers)


def _common(**overrides) -> dict:
    data = {
        "name": "  Ada Lovelace ",
        "email": " Ada@Example.COM ",
        "password": "secret1",
        "confirm_password": "secret1",
        "phone": "   ",
        "agree_to_terms": True,
        "subscribe_newsletter": False,
    }
    data.update(overrides)
    return data


def fan_form(**overrides) -> FanRegistrationForm:
    return FanRegistrationForm(**_common(**overrides))


def speaker_form(**overrides) -> SpeakerRegistrationForm:
    data = _common(company="Analytical", job_title="Engineer", bio=BIO, expertise=["Email"])
    data.update(overrides)
    return SpeakerRegistrationForm(**data)


def partner_form(**overrides) -> PartnerRegistrationForm:
    data = _common(
        company="Hooks Inc",
        job_title="CEO",
        company_description=DESCRIPTION,
        partnership_type="integration",
        website="https://hooks.example",
        offerings=["Integrations"],
    )
    data.update(overrides)
    return PartnerRegistrationForm(**data)


def sponsor_form(**overrides) -> SponsorRegistrationForm:
    data = _common(
        company="Big Co",
        job_title="CMO",
        company_description=DESCRIPTION,
        sponsorship_tier="gold",
        website="https://big.example",
        marketing_goals=["Lead generation"],
    )
    data.update(overrides)
    return SponsorRegistrationForm(**data)


# ── Remote path ──


@pytest.mark.asyncio
async def test_fan_registered_remotely_is_normalized(service, remote, sessions):
    user = await service.register_fan(fan_form())

    assert not is_local_record_id(user.id)
    assert user.email == "ada@example.com"
    assert user.full_name == "Ada Lovelace"
    assert user.phone is None
    assert user.role == UserRole.FAN
    assert user.preferences.notifications is False
    assert user.preferences.theme == "system"
    assert user.fan_profile is not None
    assert sessions.users == [user]

    stored = remote.tables["users"][0]
    assert "password" not in stored
    assert "confirm_password" not in stored


@pytest.mark.asyncio
async def test_partner_profile_attached(service):
    user = await service.register_partner(partner_form())
    assert user.role == UserRole.PARTNER
    assert user.company == "Hooks Inc"
    assert user.partner_profile.partnership_type == PartnershipType.INTEGRATION
    assert user.partner_profile.offerings == ["Integrations"]


@pytest.mark.asyncio
async def test_remote_speaker_registration_invalidates_speaker_cache(service, cache):
    cache.set("speakers", [])
    user = await service.register_speaker(speaker_form())

    assert user.speaker_profile.bio == BIO
    assert cache.get("speakers") is None


# ── Fallback path ──


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "register, form, collection, prefix",
    [
        ("register_fan", fan_form, "users", "local"),
        ("register_speaker", speaker_form, "speakers", "speaker"),
        ("register_partner", partner_form, "partners", "partner"),
        ("register_sponsor", sponsor_form, "sponsors", "sponsor"),
    ],
)
async def test_fallback_per_role(service, remote, local, sessions, register, form, collection, prefix):
    remote.fail = True

    user = await getattr(service, register)(form())

    assert user.id.startswith(f"{prefix}_")
    assert is_local_record_id(user.id)
    assert user.email == "ada@example.com"
    assert user.created_at
    assert sessions.users == [user]
    assert [r["id"] for r in local.list_records(collection)] == [user.id]


@pytest.mark.asyncio
async def test_local_speaker_keeps_speaker_cache(service, remote, cache):
    remote.fail = True
    cache.set("speakers", [])
    await service.register_speaker(speaker_form())
    assert cache.get("speakers") == []


# ── Duplicates ──


@pytest.mark.asyncio
async def test_duplicate_email_rejected_without_insert(service, remote, local, sessions):
    remote.tables["users"] = [{"id": "u-1", "email": "ada@example.com"}]

    with pytest.raises(DuplicateEntityError) as exc_info:
        await service.register_sponsor(sponsor_form())

    assert exc_info.value.message == "An account with this email already exists."
    assert remote.calls_of("create") == []
    assert local.list_records("sponsors") == []
    assert sessions.users == []


# ── Validation ──


@pytest.mark.asyncio
async def test_validation_failure_touches_nothing(service, remote, sessions):
    with pytest.raises(RegistrationValidationError) as exc_info:
        await service.register_fan(
            fan_form(name="A", email="not-an-email", password="123", confirm_password="124")
        )

    errors = exc_info.value.errors
    assert errors["name"] == "Name must be at least 2 characters"
    assert errors["email"] == "Please enter a valid email address"
    assert errors["password"] == "Password must be at least 6 characters"
    assert errors["confirm_password"] == "Passwords do not match"
    assert remote.calls == []
    assert sessions.users == []


@pytest.mark.asyncio
async def test_terms_must_be_accepted(service):
    with pytest.raises(RegistrationValidationError) as exc_info:
        await service.register_fan(fan_form(agree_to_terms=False))
    assert "agree_to_terms" in exc_info.value.errors


@pytest.mark.asyncio
async def test_speaker_bio_length_and_expertise(service):
    with pytest.raises(RegistrationValidationError) as exc_info:
        await service.register_speaker(speaker_form(bio="Too short", expertise=[]))
    errors = exc_info.value.errors
    assert errors["bio"] == "Bio must be at least 50 characters"
    assert "expertise" in errors

    with pytest.raises(RegistrationValidationError) as exc_info:
        await service.register_speaker(speaker_form(bio="x" * 501))
    assert exc_info.value.errors["bio"] == "Bio must be less than 500 characters"


@pytest.mark.asyncio
async def test_partner_requires_business_fields(service):
    with pytest.raises(RegistrationValidationError) as exc_info:
        await service.register_partner(
            partner_form(company="", website="", offerings=[], partnership_type="reseller")
        )
    assert set(exc_info.value.errors) >= {"company", "website", "offerings", "partnership_type"}


@pytest.mark.asyncio
async def test_sponsor_requires_marketing_goal_and_valid_tier(service):
    with pytest.raises(RegistrationValidationError) as exc_info:
        await service.register_sponsor(
            sponsor_form(marketing_goals=[], sponsorship_tier="diamond", company_description="")
        )
    errors = exc_info.value.errors
    assert errors["company_description"] == "Company description is required"
    assert "marketing_goals" in errors
    assert "sponsorship_tier" in errors


@pytest.mark.asyncio
async def test_admin_role_cannot_self_register(service):
    with pytest.raises(ValueError):
        await service.create_registration_record(UserRole.ADMIN, fan_form())
