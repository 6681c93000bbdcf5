"""
API request and response schemas.
"""

from .common import CamelModel, SuccessResponse, UTCDateTime
from .recovery import (
    BulkRestoreRequest,
    BulkRestoreResponse,
    CascadePurgeResponse,
    DeletedItemResponse,
    RecoveryActionResponse,
    RecoveryStatsResponse,
    SoftDeleteResponse,
)

__all__ = [
    "CamelModel",
    "SuccessResponse",
    "UTCDateTime",
    "BulkRestoreRequest",
    "BulkRestoreResponse",
    "CascadePurgeResponse",
    "DeletedItemResponse",
    "RecoveryActionResponse",
    "RecoveryStatsResponse",
    "SoftDeleteResponse",
]
