"""
Recovery ledger: list, restore and purge soft-deleted records.

Soft-deleted tasks, projects and organizations stay in their own tables with
deleted_at / expires_at / deleted_by set. Nothing here keeps a separate
ledger table.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.recovery import (
    BulkRestoreFailure,
    BulkRestoreResult,
    DeletedItemSummary,
    ExpiredError,
    NotDeletedError,
    NotFoundError,
    RecordType,
    RecoveryError,
    RecoveryStats,
    StoreError,
)
from infrastructure.config import get_settings
from infrastructure.database.models import Organization, OrganizationRole, Project, Task
from infrastructure.database.models.base import as_utc, utcnow
from services.soft_delete import RECORD_MODELS, SoftDeletable, is_valid_id

logger = logging.getLogger(__name__)


def _lookup_order(record_type: Optional[RecordType]) -> list[RecordType]:
    """Tables to search: just the given type, or all of them in fixed order."""
    if record_type is not None:
        return [record_type]
    return list(RECORD_MODELS)


async def _belongs_to_organization(
    db: AsyncSession, actor_id: str, organization_id: str
) -> bool:
    """True if the actor owns the organization or holds any role in it."""
    if not is_valid_id(organization_id):
        return False

    owned = await db.execute(
        select(Organization.id).where(
            Organization.id == organization_id,
            Organization.owner_id == actor_id,
        )
    )
    if owned.scalar_one_or_none() is not None:
        return True

    role = await db.execute(
        select(OrganizationRole.id).where(
            OrganizationRole.organization_id == organization_id,
            OrganizationRole.user_id == actor_id,
        )
    )
    return role.scalar_one_or_none() is not None


def _visibility_filters(actor_id: str, scope_id: Optional[str]):
    """Per-type WHERE clauses restricting deleted records to what the actor may see."""
    member_orgs = select(OrganizationRole.organization_id).where(
        OrganizationRole.user_id == actor_id
    )
    owned_orgs = select(Organization.id).where(Organization.owner_id == actor_id)

    task_clauses = [Task.owner_id == actor_id, Task.assignee_id == actor_id]
    project_clauses = [
        Project.owner_id == actor_id,
        Project.organization_id.in_(member_orgs),
        Project.organization_id.in_(owned_orgs),
    ]
    organization_clauses = [
        Organization.owner_id == actor_id,
        Organization.id.in_(member_orgs),
    ]

    if scope_id:
        task_clauses.append(Task.organization_id == scope_id)
        project_clauses.append(Project.organization_id == scope_id)
        organization_clauses.append(Organization.id == scope_id)

    return {
        RecordType.TASK: or_(*task_clauses),
        RecordType.PROJECT: or_(*project_clauses),
        RecordType.ORGANIZATION: or_(*organization_clauses),
    }


def _to_summary(record_type: RecordType, record: SoftDeletable) -> DeletedItemSummary:
    name = record.title if record_type == RecordType.TASK else record.name
    project_id = getattr(record, "project_id", None)
    if record_type == RecordType.ORGANIZATION:
        organization_id = record.id
    else:
        organization_id = record.organization_id
    return DeletedItemSummary(
        id=record.id,
        type=record_type,
        name=name or record_type.untitled,
        deleted_at=as_utc(record.deleted_at),
        expires_at=as_utc(record.expires_at),
        deleted_by=record.deleted_by,
        project_id=project_id,
        organization_id=organization_id,
    )


async def list_deleted_items(
    db: AsyncSession,
    actor_id: str,
    organization_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> list[DeletedItemSummary]:
    """
    List soft-deleted records the actor can still restore.

    Only records whose window has not elapsed are returned, newest deletion
    first. organization_id widens the listing to every record of that
    organization, provided the actor belongs to it.

    Args:
        db: Database session
        actor_id: Id of the requesting user
        organization_id: Optional organization scope
        now: Reference time (defaults to the current UTC time)

    Returns:
        Summaries of tasks, projects and organizations, possibly empty
    """
    now = now or utcnow()

    scope_id = None
    if organization_id and await _belongs_to_organization(db, actor_id, organization_id):
        scope_id = organization_id

    filters = _visibility_filters(actor_id, scope_id)
    items: list[DeletedItemSummary] = []

    try:
        for record_type, model in RECORD_MODELS.items():
            result = await db.execute(
                select(model).where(
                    model.deleted_at.is_not(None),
                    model.expires_at > now,
                    filters[record_type],
                )
            )
            items.extend(_to_summary(record_type, r) for r in result.scalars().all())
    except SQLAlchemyError as e:
        logger.error("Listing deleted items for %s failed: %s", actor_id, e)
        raise StoreError("Failed to fetch deleted items") from e

    items.sort(key=lambda item: item.deleted_at, reverse=True)
    return items


async def _find_record(
    db: AsyncSession,
    item_id: str,
    record_type: Optional[RecordType],
) -> tuple[RecordType, SoftDeletable]:
    """Find a record by id regardless of its deletion state."""
    if is_valid_id(item_id):
        for candidate in _lookup_order(record_type):
            model = RECORD_MODELS[candidate]
            result = await db.execute(select(model).where(model.id == item_id))
            record = result.scalar_one_or_none()
            if record is not None:
                return candidate, record
    raise NotFoundError("Item not found")


async def restore_item(
    db: AsyncSession,
    item_id: str,
    record_type: Optional[RecordType] = None,
    now: Optional[datetime] = None,
) -> RecordType:
    """
    Restore a soft-deleted record inside its recovery window.

    Clears deleted_at, expires_at and deleted_by in a single update and
    bumps updated_at. A failed restore leaves the record untouched.

    Args:
        db: Database session
        item_id: Record id
        record_type: Table to search; without it tasks, projects and
            organizations are searched in that order
        now: Reference time (defaults to the current UTC time)

    Returns:
        The type of the restored record

    Raises:
        NotFoundError: no record with that id
        NotDeletedError: the record is not soft-deleted
        ExpiredError: the recovery window has elapsed
        StoreError: the update cannot be committed
    """
    now = now or utcnow()
    found_type, record = await _find_record(db, item_id, record_type)

    if record.deleted_at is None:
        raise NotDeletedError("Item is not deleted")

    # A deleted record without an expiry breaks the invariant; never restore it
    if record.expires_at is None or now >= as_utc(record.expires_at):
        raise ExpiredError("Item has expired and cannot be recovered")

    record.clear_deletion(now)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Restoring %s %s failed: %s", found_type.value, item_id, e)
        raise StoreError("Failed to recover item") from e

    logger.info(
        "Restored %s %s",
        found_type.value,
        item_id,
        extra={"item_id": item_id, "record_type": found_type.value},
    )
    return found_type


async def permanently_delete_item(
    db: AsyncSession,
    item_id: str,
    record_type: Optional[RecordType] = None,
) -> RecordType:
    """
    Hard-delete a record by id, whatever its soft-delete state.

    Tables are tried one by one and the first match is removed. There is no
    transaction spanning the tables.

    Raises:
        NotFoundError: no table contains the id
        StoreError: the delete cannot be committed
    """
    if not is_valid_id(item_id):
        raise NotFoundError("Item not found")

    for candidate in _lookup_order(record_type):
        model = RECORD_MODELS[candidate]
        try:
            result = await db.execute(delete(model).where(model.id == item_id))
            if result.rowcount > 0:
                await db.commit()
                logger.info(
                    "Permanently deleted %s %s",
                    candidate.value,
                    item_id,
                    extra={"item_id": item_id, "record_type": candidate.value},
                )
                return candidate
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Permanent delete of %s %s failed: %s", candidate.value, item_id, e)
            raise StoreError("Failed to permanently delete item") from e

    raise NotFoundError("Item not found")


async def bulk_restore_items(
    db: AsyncSession,
    item_ids: Iterable[str],
    record_type: Optional[RecordType] = None,
    now: Optional[datetime] = None,
) -> BulkRestoreResult:
    """Restore several items independently, collecting per-item failures."""
    now = now or utcnow()
    outcome = BulkRestoreResult()

    # Duplicates would report a spurious "not deleted" for the second copy
    for item_id in dict.fromkeys(item_ids):
        try:
            await restore_item(db, item_id, record_type=record_type, now=now)
        except RecoveryError as e:
            outcome.failed.append(BulkRestoreFailure(id=item_id, error=e.message))
        else:
            outcome.recovered.append(item_id)

    logger.info(
        "Bulk restore: %d recovered, %d failed",
        len(outcome.recovered),
        len(outcome.failed),
    )
    return outcome


async def get_recovery_stats(
    db: AsyncSession,
    actor_id: str,
    organization_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> RecoveryStats:
    """Summarise the actor's restorable items by type and urgency."""
    now = now or utcnow()
    soon = now + timedelta(hours=get_settings().recovery_expiring_soon_hours)

    stats = RecoveryStats()
    for item in await list_deleted_items(db, actor_id, organization_id, now=now):
        stats.total_deleted += 1
        stats.by_type[item.type.value] += 1
        if item.expires_at <= soon:
            stats.expiring_soon += 1
    return stats


async def purge_expired_items(
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> dict[RecordType, int]:
    """
    Hard-delete every soft-deleted record whose recovery window has elapsed.

    Called periodically by the expiry sweeper in main.py.

    Returns:
        Number of rows removed per record type
    """
    now = now or utcnow()
    removed: dict[RecordType, int] = {}

    try:
        for record_type, model in RECORD_MODELS.items():
            result = await db.execute(
                delete(model)
                .where(
                    model.deleted_at.is_not(None),
                    model.expires_at <= now,
                )
                .execution_options(synchronize_session=False)
            )
            removed[record_type] = result.rowcount or 0
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Expired item sweep failed: %s", e)
        raise StoreError("Failed to purge expired items") from e

    total = sum(removed.values())
    if total:
        logger.info(
            "Purged %d expired soft-deleted records (%s)",
            total,
            ", ".join(f"{t.value}={n}" for t, n in removed.items()),
        )
    return removed
