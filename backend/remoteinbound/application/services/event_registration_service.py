"""Event registration use cases: signing users up for events and cancelling.

Event registrations are remote-only: there is no local fallback, so a
hosted-database failure reaches the caller as RemoteServiceError.
"""

import logging
import uuid

from remoteinbound.application.interfaces import RemoteDataService
from remoteinbound.application.services.row_mappers import registration_from_row
from remoteinbound.domain.entities import AttendanceType, Registration, RegistrationStatus
from remoteinbound.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    RegistrationValidationError,
)

logger = logging.getLogger(__name__)

REGISTRATIONS_TABLE = "registrations"


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except (ValueError, AttributeError, TypeError):
        return False
    return True


def _validate_uuid(errors: dict[str, str], field: str, label: str, value: str) -> None:
    if not value:
        errors[field] = f"{label} is required"
    elif not _is_uuid(value):
        errors[field] = "Invalid UUID format"


def _validate_ids(user_id: str, event_id: str) -> dict[str, str]:
    errors: dict[str, str] = {}
    _validate_uuid(errors, "user_id", "User ID", user_id)
    _validate_uuid(errors, "event_id", "Event ID", event_id)
    return errors


class EventRegistrationService:
    def __init__(self, remote: RemoteDataService):
        self._remote = remote

    async def _active_registration(self, user_id: str, event_id: str) -> Registration | None:
        rows = await self._remote.list_entities(
            REGISTRATIONS_TABLE, {"user_id": user_id, "event_id": event_id}
        )
        for row in rows:
            registration = registration_from_row(row)
            if registration.is_active:
                return registration
        return None

    async def register(
        self, user_id: str, event_id: str, type: str = AttendanceType.VIRTUAL.value
    ) -> Registration:
        """Register a user for an event.

        Raises:
            RegistrationValidationError: If the ids or the attendance type are invalid.
            DuplicateEntityError: If the user already holds an active registration.
        """
        errors = _validate_ids(user_id, event_id)
        if type not in {t.value for t in AttendanceType}:
            errors["type"] = "Registration type must be 'virtual' or 'in_person'"
        if errors:
            raise RegistrationValidationError(errors)

        if await self._active_registration(user_id, event_id) is not None:
            raise DuplicateEntityError(
                "Registration",
                "event_id",
                event_id,
                message="User is already registered for this event",
            )

        row = await self._remote.create_entity(
            REGISTRATIONS_TABLE,
            {
                "user_id": user_id,
                "event_id": event_id,
                "registration_type": type,
                "status": RegistrationStatus.REGISTERED.value,
            },
        )
        logger.info("User %s registered for event %s", user_id, event_id)
        return registration_from_row(row)

    async def list_event_ids(self, user_id: str) -> list[str]:
        """Return the ids of the events the user is actively registered for."""
        errors: dict[str, str] = {}
        _validate_uuid(errors, "user_id", "User ID", user_id)
        if errors:
            raise RegistrationValidationError(errors)

        rows = await self._remote.list_entities(REGISTRATIONS_TABLE, {"user_id": user_id})
        return [
            registration.event_id
            for registration in map(registration_from_row, rows)
            if registration.is_active
        ]

    async def cancel(self, user_id: str, event_id: str) -> Registration:
        """Cancel an active registration.

        Raises:
            EntityNotFoundError: If there is no active registration to cancel.
        """
        errors = _validate_ids(user_id, event_id)
        if errors:
            raise RegistrationValidationError(errors)

        registration = await self._active_registration(user_id, event_id)
        if registration is None:
            raise EntityNotFoundError("Registration", f"{user_id}/{event_id}")

        row = await self._remote.update_entity(
            REGISTRATIONS_TABLE,
            registration.id,
            {"status": RegistrationStatus.CANCELLED.value},
        )
        if row is None:
            raise EntityNotFoundError("Registration", registration.id)

        logger.info("User %s cancelled registration for event %s", user_id, event_id)
        return registration_from_row(row)
