"""Account registration endpoints, one per role.

Registrations succeed even when the hosted database is down: the record
is kept locally and the returned id has the ``<prefix>_<millis>`` shape.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from remoteinbound.application.schemas import (
    FanRegistrationForm,
    PartnerRegistrationForm,
    SpeakerRegistrationForm,
    SponsorRegistrationForm,
    UserResponse,
)
from remoteinbound.application.services import RegistrationService
from remoteinbound.domain.entities import User
from remoteinbound.domain.exceptions import (
    DuplicateEntityError,
    RegistrationValidationError,
    StorageError,
)
from remoteinbound.infrastructure.dependencies import get_registration_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/registrations", tags=["Registrations"])

REGISTRATION_UNAVAILABLE_MESSAGE = "Registration is temporarily unavailable. Please try again later."


async def _register(coro) -> UserResponse:
    try:
        user: User = await coro
    except RegistrationValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": e.errors},
        )
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except StorageError:
        logger.exception("Registration could not be stored locally")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=REGISTRATION_UNAVAILABLE_MESSAGE,
        )
    return UserResponse.model_validate(user, from_attributes=True)


@router.post("/fan", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_fan(
    form: FanRegistrationForm,
    service: RegistrationService = Depends(get_registration_service),
) -> UserResponse:
    return await _register(service.register_fan(form))


@router.post("/speaker", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_speaker(
    form: SpeakerRegistrationForm,
    service: RegistrationService = Depends(get_registration_service),
) -> UserResponse:
    return await _register(service.register_speaker(form))


@router.post("/partner", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_partner(
    form: PartnerRegistrationForm,
    service: RegistrationService = Depends(get_registration_service),
) -> UserResponse:
    return await _register(service.register_partner(form))


@router.post("/sponsor", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_sponsor(
    form: SponsorRegistrationForm,
    service: RegistrationService = Depends(get_registration_service),
) -> UserResponse:
    return await _register(service.register_sponsor(form))
