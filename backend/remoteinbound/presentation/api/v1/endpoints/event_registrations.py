"""Event registration endpoints (remote only)."""

from fastapi import APIRouter, Depends, HTTPException, status

from remoteinbound.application.schemas import (
    EventRegistrationCancel,
    EventRegistrationCreate,
    EventRegistrationResponse,
)
from remoteinbound.application.services import EventRegistrationService
from remoteinbound.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    RegistrationValidationError,
    RemoteServiceError,
)
from remoteinbound.infrastructure.dependencies import get_event_registration_service

router = APIRouter(prefix="/event-registrations", tags=["Event Registrations"])


@router.post("", response_model=EventRegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_for_event(
    data: EventRegistrationCreate,
    service: EventRegistrationService = Depends(get_event_registration_service),
) -> EventRegistrationResponse:
    try:
        registration = await service.register(data.user_id, data.event_id, data.type)
    except RegistrationValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail={"errors": e.errors}
        )
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return EventRegistrationResponse.model_validate(registration, from_attributes=True)


@router.get("/users/{user_id}", response_model=list[str])
async def list_user_event_ids(
    user_id: str,
    service: EventRegistrationService = Depends(get_event_registration_service),
) -> list[str]:
    """Ids of the events the user is registered for."""
    try:
        return await service.list_event_ids(user_id)
    except RegistrationValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail={"errors": e.errors}
        )
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)


@router.put("/cancel", response_model=EventRegistrationResponse)
async def cancel_event_registration(
    data: EventRegistrationCancel,
    service: EventRegistrationService = Depends(get_event_registration_service),
) -> EventRegistrationResponse:
    try:
        registration = await service.cancel(data.user_id, data.event_id)
    except RegistrationValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail={"errors": e.errors}
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return EventRegistrationResponse.model_validate(registration, from_attributes=True)
