# Domain Entities
# Pure business objects with no external dependencies
from .recovery import (
    BulkRestoreFailure,
    BulkRestoreResult,
    CascadePurgeResult,
    DeletedItemSummary,
    ExpiredError,
    NotDeletedError,
    NotFoundError,
    PermissionDeniedError,
    RecordType,
    RecoveryError,
    RecoveryStats,
    StoreError,
    ValidationError,
)
from .roles import OrganizationRoleName, Permission, has_permission

__all__ = [
    "RecordType",
    "DeletedItemSummary",
    "BulkRestoreFailure",
    "BulkRestoreResult",
    "RecoveryStats",
    "CascadePurgeResult",
    "RecoveryError",
    "ValidationError",
    "NotFoundError",
    "NotDeletedError",
    "ExpiredError",
    "PermissionDeniedError",
    "StoreError",
    "OrganizationRoleName",
    "Permission",
    "has_permission",
]
