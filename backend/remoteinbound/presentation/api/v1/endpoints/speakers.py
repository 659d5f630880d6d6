"""Speaker listing, publishing and editing endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from remoteinbound.application.schemas import SpeakerCreate, SpeakerResponse, SpeakerUpdate
from remoteinbound.application.services import ConferenceContentService
from remoteinbound.domain.exceptions import RemoteServiceError
from remoteinbound.infrastructure.dependencies import get_content_service

router = APIRouter(prefix="/speakers", tags=["Speakers"])


@router.get("", response_model=list[SpeakerResponse])
async def list_speakers(
    use_cache: bool = Query(True, description="Serve from cache when fresh"),
    content: ConferenceContentService = Depends(get_content_service),
) -> list[SpeakerResponse]:
    """List all published speakers."""
    try:
        speakers = await content.speakers.get_all(use_cache=use_cache)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return [SpeakerResponse.model_validate(s, from_attributes=True) for s in speakers]


@router.get("/{speaker_id}", response_model=SpeakerResponse)
async def get_speaker(
    speaker_id: str,
    content: ConferenceContentService = Depends(get_content_service),
) -> SpeakerResponse:
    try:
        speaker = await content.speakers.get_by_id(speaker_id)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    if speaker is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Speaker with id '{speaker_id}' not found",
        )
    return SpeakerResponse.model_validate(speaker, from_attributes=True)


@router.post("", response_model=SpeakerResponse, status_code=status.HTTP_201_CREATED)
async def create_speaker(
    data: SpeakerCreate,
    content: ConferenceContentService = Depends(get_content_service),
) -> SpeakerResponse:
    """Publish a speaker. Requires the hosted database; there is no local fallback."""
    try:
        speaker = await content.speakers.create_speaker(data)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return SpeakerResponse.model_validate(speaker, from_attributes=True)


@router.put("/{speaker_id}", response_model=SpeakerResponse)
async def update_speaker(
    speaker_id: str,
    data: SpeakerUpdate,
    content: ConferenceContentService = Depends(get_content_service),
) -> SpeakerResponse:
    try:
        speaker = await content.speakers.update_speaker(speaker_id, data)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    if speaker is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Speaker with id '{speaker_id}' not found",
        )
    return SpeakerResponse.model_validate(speaker, from_attributes=True)


@router.delete("/{speaker_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_speaker(
    speaker_id: str,
    content: ConferenceContentService = Depends(get_content_service),
) -> None:
    try:
        deleted = await content.speakers.delete_speaker(speaker_id)
    except RemoteServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Speaker with id '{speaker_id}' not found",
        )
