"""Account lookups and edits against the hosted ``users`` table.

User rows are personal and change on every profile edit, so they are read
straight from the hosted database and never cached. Accounts that only
exist in local storage are not visible here.
"""

import logging
from datetime import datetime, timezone

from remoteinbound.application.interfaces import RemoteDataService
from remoteinbound.application.schemas.user import UserUpdate
from remoteinbound.application.services.registration_service import (
    EMAIL_PATTERN,
    REMOTE_USERS_TABLE,
)
from remoteinbound.application.services.row_mappers import user_from_row
from remoteinbound.domain.entities import User
from remoteinbound.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    RegistrationValidationError,
)

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, remote: RemoteDataService):
        self._remote = remote

    async def get_all(self) -> list[User]:
        rows = await self._remote.list_entities(REMOTE_USERS_TABLE)
        return [user_from_row(row) for row in rows]

    async def get_by_id(self, user_id: str) -> User | None:
        row = await self._remote.get_entity(REMOTE_USERS_TABLE, user_id)
        return user_from_row(row) if row is not None else None

    async def get_by_email(self, email: str) -> User | None:
        """Look up an account by email; stored emails are lowercase."""
        row = await self._remote.find_by_field(
            REMOTE_USERS_TABLE, "email", email.strip().lower()
        )
        return user_from_row(row) if row is not None else None

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        """Apply the fields set on ``data`` to an existing account.

        Raises:
            EntityNotFoundError: If the account does not exist.
            RegistrationValidationError: If the new email is malformed.
            DuplicateEntityError: If the new email belongs to another account.
        """
        if await self._remote.get_entity(REMOTE_USERS_TABLE, user_id) is None:
            raise EntityNotFoundError("User", user_id)

        changes = data.model_dump(exclude_none=True)
        for field in ("full_name", "company", "job_title", "phone"):
            if field in changes:
                changes[field] = changes[field].strip()

        if "email" in changes:
            email = changes["email"].strip().lower()
            if not EMAIL_PATTERN.match(email):
                raise RegistrationValidationError({"email": "Please enter a valid email address"})
            owner = await self._remote.find_by_field(REMOTE_USERS_TABLE, "email", email)
            if owner is not None and str(owner.get("id")) != user_id:
                raise DuplicateEntityError(
                    "User", "email", email, message="Email already taken by another user"
                )
            changes["email"] = email

        changes["updated_at"] = datetime.now(timezone.utc).isoformat()
        row = await self._remote.update_entity(REMOTE_USERS_TABLE, user_id, changes)
        if row is None:
            raise EntityNotFoundError("User", user_id)

        logger.info("Updated user %s", user_id)
        return user_from_row(row)

    async def delete_user(self, user_id: str) -> None:
        """Delete an account.

        Raises:
            EntityNotFoundError: If the account does not exist.
        """
        if not await self._remote.delete_entity(REMOTE_USERS_TABLE, user_id):
            raise EntityNotFoundError("User", user_id)
        logger.info("Deleted user %s", user_id)
