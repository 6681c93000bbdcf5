"""
Centralised soft delete for tasks, projects and organizations.

Every domain delete endpoint goes through soft_delete_record() so the
deletion fields are always written the same way.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.recovery import NotFoundError, RecordType, StoreError
from infrastructure.config import get_settings
from infrastructure.database.models import Organization, Project, Task
from infrastructure.database.models.base import utcnow

logger = logging.getLogger(__name__)

SoftDeletable = Union[Task, Project, Organization]

# Lookup order matters: ids without a type are searched in this order
RECORD_MODELS: dict[RecordType, type[SoftDeletable]] = {
    RecordType.TASK: Task,
    RecordType.PROJECT: Project,
    RecordType.ORGANIZATION: Organization,
}


def recovery_window() -> timedelta:
    """How long a soft-deleted record stays restorable."""
    return timedelta(hours=get_settings().recovery_window_hours)


def is_valid_id(value: str) -> bool:
    """Record ids are UUID strings; anything else can never match."""
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


async def get_live_record(
    db: AsyncSession,
    record_type: RecordType,
    record_id: str,
) -> SoftDeletable:
    """
    Load a record that is not soft-deleted.

    This is the "normal query" path: soft-deleted rows are invisible here.

    Raises:
        NotFoundError: if the id is unknown or the record is soft-deleted
    """
    not_found = NotFoundError(f"{record_type.value.capitalize()} not found")
    if not is_valid_id(record_id):
        raise not_found

    model = RECORD_MODELS[record_type]
    result = await db.execute(
        select(model).where(
            model.id == record_id,
            model.deleted_at.is_(None),
        )
    )
    record = result.scalar_one_or_none()
    if record is None:
        raise not_found
    return record


async def soft_delete_record(
    db: AsyncSession,
    record_type: RecordType,
    record_id: str,
    actor_id: str,
    now: Optional[datetime] = None,
) -> SoftDeletable:
    """
    Mark a record as deleted and start its recovery window.

    Sets deleted_at=now, expires_at=now+window and deleted_by=actor_id.

    Args:
        db: Database session
        record_type: Which table the id belongs to
        record_id: Record id
        actor_id: Id of the user performing the delete
        now: Deletion time (defaults to the current UTC time)

    Returns:
        The updated record

    Raises:
        NotFoundError: if the record does not exist or is already deleted
        StoreError: if the update cannot be committed
    """
    now = now or utcnow()
    record = await get_live_record(db, record_type, record_id)
    record.mark_deleted(actor_id, now, recovery_window())

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Soft delete of %s %s failed: %s", record_type.value, record_id, e)
        raise StoreError(f"Failed to delete {record_type.value}") from e

    logger.info(
        "Soft-deleted %s %s by %s (recoverable until %s)",
        record_type.value,
        record_id,
        actor_id,
        record.expires_at,
        extra={
            "item_id": record_id,
            "record_type": record_type.value,
            "user_id": actor_id,
        },
    )
    return record
