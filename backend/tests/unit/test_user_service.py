"""Unit tests for UserService."""

import pytest

from remoteinbound.application.schemas import UserUpdate
from remoteinbound.application.services import UserService
from remoteinbound.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    RegistrationValidationError,
)

USERS = [
    {"id": "u-1", "email": "ada@example.com", "full_name": "Ada Lovelace", "role": "speaker"},
    {"id": "u-2", "email": "grace@example.com", "full_name": "Grace Hopper", "role": "fan"},
]


@pytest.fixture
def service(remote) -> UserService:
    remote.tables["users"] = [dict(u) for u in USERS]
    return UserService(remote)


@pytest.mark.asyncio
async def test_lookups(service):
    assert [u.id for u in await service.get_all()] == ["u-1", "u-2"]
    assert (await service.get_by_id("u-2")).full_name == "Grace Hopper"
    assert await service.get_by_id("missing") is None
    assert (await service.get_by_email(" ADA@example.com ")).id == "u-1"
    assert await service.get_by_email("nobody@example.com") is None


@pytest.mark.asyncio
async def test_users_are_never_cached(service, remote):
    await service.get_all()
    await service.get_all()
    assert len(remote.calls_of("list")) == 2


@pytest.mark.asyncio
async def test_update_user_applies_set_fields(service, remote):
    user = await service.update_user(
        "u-1", UserUpdate(full_name=" Ada King ", email="Ada.King@Example.com")
    )

    assert user.full_name == "Ada King"
    assert user.email == "ada.king@example.com"
    _, _, (_, changes) = remote.calls_of("update")[0]
    assert set(changes) == {"full_name", "email", "updated_at"}


@pytest.mark.asyncio
async def test_update_user_keeps_own_email(service):
    user = await service.update_user("u-1", UserUpdate(email="ada@example.com", company="Analytical"))
    assert user.company == "Analytical"


@pytest.mark.asyncio
async def test_update_user_email_taken_by_someone_else(service, remote):
    with pytest.raises(DuplicateEntityError) as exc_info:
        await service.update_user("u-1", UserUpdate(email="grace@example.com"))

    assert exc_info.value.message == "Email already taken by another user"
    assert remote.calls_of("update") == []


@pytest.mark.asyncio
async def test_update_user_rejects_malformed_email(service):
    with pytest.raises(RegistrationValidationError) as exc_info:
        await service.update_user("u-1", UserUpdate(email="not-an-email"))
    assert "email" in exc_info.value.errors


@pytest.mark.asyncio
async def test_update_missing_user(service):
    with pytest.raises(EntityNotFoundError):
        await service.update_user("missing", UserUpdate(full_name="X"))


@pytest.mark.asyncio
async def test_delete_user(service, remote):
    await service.delete_user("u-2")

    assert [u["id"] for u in remote.tables["users"]] == ["u-1"]
    with pytest.raises(EntityNotFoundError):
        await service.delete_user("u-2")
