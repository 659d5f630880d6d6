"""Agenda session endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from remoteinbound.application.schemas import SessionResponse
from remoteinbound.application.services import ConferenceContentService
from remoteinbound.domain.exceptions import RemoteServiceError
from remoteinbound.infrastructure.dependencies import get_content_service

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", response_model=list[SessionResponse])
async def list_sessions(
    search: str | None = Query(None, description="Match title or description"),
    track: str | None = Query(None),
    level: str | None = Query(None),
    type: str | None = Query(None, description="Keynote, Workshop, Session or Deep Dive"),
    use_cache: bool = Query(True, description="Serve from cache when fresh"),
    content: ConferenceContentService = Depends(get_content_service),
) -> list[SessionResponse]:
    """List agenda sessions, optionally filtered."""
    filters = {"search": search, "track": track, "level": level, "type": type}
    try:
        sessions = await content.sessions.get_all(filters, use_cache=use_cache)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return [SessionResponse.model_validate(s, from_attributes=True) for s in sessions]


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    content: ConferenceContentService = Depends(get_content_service),
) -> SessionResponse:
    try:
        session = await content.sessions.get_by_id(session_id)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session with id '{session_id}' not found",
        )
    return SessionResponse.model_validate(session, from_attributes=True)
