"""Cache diagnostics and maintenance endpoints."""

from fastapi import APIRouter, Depends, status

from remoteinbound.application.schemas import CacheInfoResponse
from remoteinbound.application.services import VersionedTTLCache
from remoteinbound.infrastructure.dependencies import get_cache

router = APIRouter(prefix="/cache", tags=["Cache"])


@router.get("", response_model=CacheInfoResponse)
def get_cache_info(cache: VersionedTTLCache = Depends(get_cache)) -> CacheInfoResponse:
    """Stored entries with their size, write time and version, plus hit/miss counters."""
    return CacheInfoResponse(
        entries=cache.get_cache_info(),
        stats=cache.stats,
        available=cache.is_available(),
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cache(cache: VersionedTTLCache = Depends(get_cache)) -> None:
    cache.clear()
