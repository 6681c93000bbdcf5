"""
Permanent deletion of an organization and everything under it.
"""

import logging

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.recovery import CascadePurgeResult, StoreError
from infrastructure.database.models import (
    BoardColumn,
    Organization,
    OrganizationRole,
    Project,
    Task,
)
from services.soft_delete import is_valid_id

logger = logging.getLogger(__name__)


async def purge_organization(db: AsyncSession, organization_id: str) -> CascadePurgeResult:
    """
    Permanently delete an organization with its projects, tasks, columns and roles.

    All deletes run in one transaction and are committed together; on any
    failure the transaction is rolled back and nothing is removed. Works on
    live and soft-deleted organizations alike. There is no undo.

    Purging an organization that does not exist deletes nothing and reports
    zero counts.

    Args:
        db: Database session
        organization_id: Organization to purge

    Returns:
        Number of rows removed per table

    Raises:
        StoreError: if any delete fails
    """
    outcome = CascadePurgeResult(organization_id=organization_id)

    if not is_valid_id(organization_id):
        logger.info("Organization %s not found; nothing to purge", organization_id)
        return outcome

    result = await db.execute(
        select(Organization.id).where(Organization.id == organization_id)
    )
    if result.scalar_one_or_none() is None:
        logger.info("Organization %s not found; nothing to purge", organization_id)
        return outcome

    try:
        project_rows = await db.execute(
            select(Project.id).where(Project.organization_id == organization_id)
        )
        project_ids = list(project_rows.scalars().all())
        logger.info(
            "Purging organization %s: %d projects found",
            organization_id,
            len(project_ids),
        )

        task_filter = Task.organization_id == organization_id
        if project_ids:
            task_filter = or_(task_filter, Task.project_id.in_(project_ids))

        tasks = await db.execute(
            delete(Task).where(task_filter).execution_options(synchronize_session=False)
        )
        outcome.tasks = tasks.rowcount or 0

        if project_ids:
            columns = await db.execute(
                delete(BoardColumn)
                .where(BoardColumn.project_id.in_(project_ids))
                .execution_options(synchronize_session=False)
            )
            outcome.columns = columns.rowcount or 0

        projects = await db.execute(
            delete(Project)
            .where(Project.organization_id == organization_id)
            .execution_options(synchronize_session=False)
        )
        outcome.projects = projects.rowcount or 0

        roles = await db.execute(
            delete(OrganizationRole)
            .where(OrganizationRole.organization_id == organization_id)
            .execution_options(synchronize_session=False)
        )
        outcome.roles = roles.rowcount or 0

        await db.execute(
            delete(Organization)
            .where(Organization.id == organization_id)
            .execution_options(synchronize_session=False)
        )

        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Permanent delete of organization %s failed: %s", organization_id, e)
        raise StoreError("Failed to permanently delete organization") from e

    logger.info(
        "Organization %s permanently deleted (%d projects, %d tasks, %d columns, %d roles)",
        organization_id,
        outcome.projects,
        outcome.tasks,
        outcome.columns,
        outcome.roles,
    )
    return outcome
