"""Soft-delete recovery domain types and errors."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class RecordType(str, Enum):
    """Kinds of records that can be soft-deleted.

    Declaration order is the lookup order used when a caller passes an id
    without a type.
    """
    TASK = "task"
    PROJECT = "project"
    ORGANIZATION = "organization"

    @property
    def untitled(self) -> str:
        """Display name for records without a name/title."""
        return f"Untitled {self.value.capitalize()}"


@dataclass
class DeletedItemSummary:
    """One entry of the deleted-items listing."""

    id: str
    type: RecordType
    name: str
    deleted_at: datetime
    expires_at: datetime
    deleted_by: Optional[str] = None
    project_id: Optional[str] = None
    organization_id: Optional[str] = None


@dataclass
class BulkRestoreFailure:
    id: str
    error: str


@dataclass
class BulkRestoreResult:
    """Outcome of restoring several items independently."""

    recovered: list[str] = field(default_factory=list)
    failed: list[BulkRestoreFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed


@dataclass
class RecoveryStats:
    """Counts over the items an actor can still restore."""

    total_deleted: int = 0
    expiring_soon: int = 0
    by_type: dict[str, int] = field(
        default_factory=lambda: {t.value: 0 for t in RecordType}
    )


@dataclass
class CascadePurgeResult:
    """Number of rows removed by an organization cascade purge."""

    organization_id: str
    projects: int = 0
    tasks: int = 0
    columns: int = 0
    roles: int = 0


# Errors
class RecoveryError(Exception):
    """Base exception for soft-delete and recovery failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RecoveryError):
    """Raised when required input (e.g. the actor id) is missing."""

    status_code = 400


class NotFoundError(RecoveryError):
    """Raised when no record matches in any searched table."""

    status_code = 404


class NotDeletedError(RecoveryError):
    """Raised when restoring a record that is not soft-deleted."""

    status_code = 400


class ExpiredError(RecoveryError):
    """Raised when the recovery window of a record has elapsed."""

    status_code = 400


class PermissionDeniedError(RecoveryError):
    """Raised when the actor may not delete the record."""

    status_code = 403


class StoreError(RecoveryError):
    """Raised when the underlying database call fails."""

    status_code = 500
