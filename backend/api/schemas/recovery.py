"""
Recovery (soft delete) API schemas.
"""

from typing import List, Optional

from pydantic import Field

from core.domain.recovery import RecordType

from .common import CamelModel, SuccessResponse, UTCDateTime


class DeletedItemResponse(CamelModel):
    """One soft-deleted record in the recovery listing."""

    id: str
    type: RecordType
    name: str
    deleted_at: UTCDateTime
    expires_at: UTCDateTime
    deleted_by: Optional[str] = None
    project_id: Optional[str] = None
    organization_id: Optional[str] = None


class RecoveryActionResponse(SuccessResponse):
    """Result of a restore or permanent delete."""

    type: RecordType


class BulkRestoreRequest(CamelModel):
    """Restore several items in one call."""

    item_ids: List[str] = Field(..., min_length=1, max_length=100)
    type: Optional[RecordType] = None


class BulkRestoreFailureResponse(CamelModel):
    id: str
    error: str


class BulkRestoreResponse(CamelModel):
    success: bool
    recovered: List[str]
    failed: List[BulkRestoreFailureResponse]


class RecoveryStatsResponse(CamelModel):
    """Counts of restorable items."""

    total_deleted: int
    expiring_soon: int
    by_type: dict[str, int]


class SoftDeleteResponse(CamelModel):
    """Returned by every domain delete endpoint."""

    success: bool = True
    id: str
    type: RecordType
    deleted_at: UTCDateTime
    expires_at: UTCDateTime


class CascadePurgeResponse(SuccessResponse):
    """Result of permanently deleting an organization."""

    organization_id: str
    projects: int
    tasks: int
    columns: int
    roles: int
