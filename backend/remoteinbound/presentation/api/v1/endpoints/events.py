"""Event listing, publishing and editing endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from remoteinbound.application.schemas import EventCreate, EventResponse, EventUpdate
from remoteinbound.application.services import ConferenceContentService
from remoteinbound.domain.exceptions import (
    DuplicateEntityError,
    RegistrationValidationError,
    RemoteServiceError,
)
from remoteinbound.infrastructure.dependencies import get_content_service

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=list[EventResponse])
async def list_events(
    status_filter: str | None = Query(None, alias="status", description="upcoming, live or ended"),
    use_cache: bool = Query(True),
    content: ConferenceContentService = Depends(get_content_service),
) -> list[EventResponse]:
    try:
        events = await content.events.get_all({"status": status_filter}, use_cache=use_cache)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return [EventResponse.model_validate(ev, from_attributes=True) for ev in events]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    content: ConferenceContentService = Depends(get_content_service),
) -> EventResponse:
    try:
        event = await content.events.get_by_id(event_id)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event with id '{event_id}' not found",
        )
    return EventResponse.model_validate(event, from_attributes=True)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    content: ConferenceContentService = Depends(get_content_service),
) -> EventResponse:
    try:
        event = await content.events.create_event(data)
    except RegistrationValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail={"errors": e.errors}
        )
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return EventResponse.model_validate(event, from_attributes=True)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    data: EventUpdate,
    content: ConferenceContentService = Depends(get_content_service),
) -> EventResponse:
    try:
        event = await content.events.update_event(event_id, data)
    except RegistrationValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail={"errors": e.errors}
        )
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event with id '{event_id}' not found",
        )
    return EventResponse.model_validate(event, from_attributes=True)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    content: ConferenceContentService = Depends(get_content_service),
) -> None:
    try:
        deleted = await content.events.delete_event(event_id)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event with id '{event_id}' not found",
        )
