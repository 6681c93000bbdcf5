"""
Recovery API routes: list, restore and permanently delete soft-deleted items.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps_access import require_actor_id
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.recovery import (
    BulkRestoreRequest,
    BulkRestoreResponse,
    DeletedItemResponse,
    RecoveryActionResponse,
    RecoveryStatsResponse,
)
from core.domain.recovery import RecordType
from infrastructure.database.connection import get_db
from services import recovery as recovery_service

router = APIRouter(prefix="/recovery", tags=["Recovery"])

# Optional explicit record type; without it ids are looked up task -> project -> organization
RecordTypeQuery = Annotated[Optional[RecordType], Query(alias="type")]


@router.get("", response_model=List[DeletedItemResponse])
async def list_deleted_items(
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
    organization_id: Annotated[Optional[str], Query(alias="organizationId")] = None,
):
    """
    List soft-deleted items the user can still restore, newest deletion first.
    """
    return await recovery_service.list_deleted_items(db, actor_id, organization_id)


@router.get("/stats", response_model=RecoveryStatsResponse)
async def get_recovery_stats(
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
    organization_id: Annotated[Optional[str], Query(alias="organizationId")] = None,
):
    """Counts of restorable items by type, and how many expire soon."""
    return await recovery_service.get_recovery_stats(db, actor_id, organization_id)


@router.post("/bulk-restore", response_model=BulkRestoreResponse)
@limiter.limit(get_rate_limit("bulk_restore"))
async def bulk_restore(
    request: Request,
    data: BulkRestoreRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Restore several items. Each item succeeds or fails on its own.
    """
    outcome = await recovery_service.bulk_restore_items(
        db, data.item_ids, record_type=data.type
    )
    return BulkRestoreResponse(
        success=outcome.success,
        recovered=outcome.recovered,
        failed=[{"id": f.id, "error": f.error} for f in outcome.failed],
    )


@router.post("/{item_id}/restore", response_model=RecoveryActionResponse)
@limiter.shared_limit(get_rate_limit("restore"), scope="restore")
async def restore_item(
    request: Request,
    item_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    record_type: RecordTypeQuery = None,
):
    """
    Restore a soft-deleted item before its recovery window closes.
    """
    restored = await recovery_service.restore_item(db, item_id, record_type=record_type)
    return RecoveryActionResponse(message="Item recovered successfully", type=restored)


@router.delete("/{item_id}/permanent", response_model=RecoveryActionResponse)
@limiter.shared_limit(get_rate_limit("permanent_delete"), scope="permanent_delete")
async def permanently_delete_item(
    request: Request,
    item_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    record_type: RecordTypeQuery = None,
):
    """
    Permanently delete an item, whether or not it was soft-deleted. Irreversible.
    """
    purged = await recovery_service.permanently_delete_item(db, item_id, record_type=record_type)
    return RecoveryActionResponse(message="Item permanently deleted", type=purged)
