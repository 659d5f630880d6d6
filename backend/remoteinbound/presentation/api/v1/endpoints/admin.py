"""Admin view of registrations kept in local storage while the hosted database was down."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from remoteinbound.infrastructure.dependencies import get_local_record_store
from remoteinbound.infrastructure.storage import LocalRecordStore

router = APIRouter(prefix="/admin", tags=["Admin"])

LOCAL_COLLECTIONS = ("users", "speakers", "partners", "sponsors")


@router.get("/local-records/{collection}")
def list_local_records(
    collection: str,
    records: LocalRecordStore = Depends(get_local_record_store),
) -> list[dict[str, Any]]:
    """Records created by the local fallback; these never appear in remote listings."""
    if collection not in LOCAL_COLLECTIONS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown local collection '{collection}'",
        )
    return records.list_records(collection)
