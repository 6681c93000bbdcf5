"""
Project, board column and project task API routes.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps_access import (
    require_actor_id,
    verify_organization_member,
    verify_project_delete,
)
from api.schemas.project import (
    ColumnCreate,
    ColumnListResponse,
    ColumnResponse,
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
)
from api.schemas.recovery import SoftDeleteResponse
from api.schemas.task import TaskListResponse, TaskResponse
from core.domain.recovery import RecordType
from infrastructure.database.connection import get_db
from infrastructure.database.models import BoardColumn, Organization, OrganizationRole, Project, Task
from services.soft_delete import get_live_record, soft_delete_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["Projects"])


# =============================================================================
# Project CRUD
# =============================================================================

@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Create a project.

    With organization_id the user must belong to that (live) organization;
    without it the project is personal.
    """
    if data.organization_id:
        organization = await get_live_record(db, RecordType.ORGANIZATION, data.organization_id)
        await verify_organization_member(db, organization, actor_id)

    project = Project(
        name=data.name,
        description=data.description,
        owner_id=actor_id,
        organization_id=data.organization_id,
    )
    db.add(project)
    await db.commit()

    logger.info("Project %s created by %s", project.id, actor_id)
    return ProjectResponse.model_validate(project)


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
    organization_id: Annotated[Optional[str], Query(alias="organizationId")] = None,
):
    """
    List live projects.

    With organizationId: every live project of that organization (membership
    required). Without it: projects the user owns or can reach through an
    organization role.
    """
    stmt = select(Project).where(Project.deleted_at.is_(None))

    if organization_id:
        organization = await get_live_record(db, RecordType.ORGANIZATION, organization_id)
        await verify_organization_member(db, organization, actor_id)
        stmt = stmt.where(Project.organization_id == organization_id)
    else:
        member_orgs = select(OrganizationRole.organization_id).where(
            OrganizationRole.user_id == actor_id
        )
        owned_orgs = select(Organization.id).where(Organization.owner_id == actor_id)
        stmt = stmt.where(
            or_(
                Project.owner_id == actor_id,
                Project.organization_id.in_(member_orgs),
                Project.organization_id.in_(owned_orgs),
            )
        )

    result = await db.execute(stmt.order_by(Project.created_at))
    projects = result.scalars().all()

    return ProjectListResponse(
        projects=[ProjectResponse.model_validate(p) for p in projects],
        total=len(projects),
    )


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a live project."""
    project = await get_live_record(db, RecordType.PROJECT, project_id)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", response_model=SoftDeleteResponse)
async def delete_project(
    project_id: str,
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Delete a project (soft delete).

    Only the project owner or an organization owner/admin can delete it.
    """
    project = await get_live_record(db, RecordType.PROJECT, project_id)
    await verify_project_delete(db, project, actor_id)

    project = await soft_delete_record(db, RecordType.PROJECT, project_id, actor_id)
    return SoftDeleteResponse(
        id=project.id,
        type=RecordType.PROJECT,
        deleted_at=project.deleted_at,
        expires_at=project.expires_at,
    )


# =============================================================================
# Board Columns
# =============================================================================

@router.post(
    "/{project_id}/columns",
    response_model=ColumnResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_column(
    project_id: str,
    data: ColumnCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Add a column to a project's board (appended when no order is given)."""
    project = await get_live_record(db, RecordType.PROJECT, project_id)

    order = data.order
    if order is None:
        result = await db.execute(
            select(func.count()).select_from(BoardColumn).where(
                BoardColumn.project_id == project.id
            )
        )
        order = result.scalar() or 0

    column = BoardColumn(project_id=project.id, title=data.title, order=order)
    db.add(column)
    await db.commit()

    return ColumnResponse.model_validate(column)


@router.get("/{project_id}/columns", response_model=ColumnListResponse)
async def list_columns(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """List a project's board columns in display order."""
    project = await get_live_record(db, RecordType.PROJECT, project_id)

    result = await db.execute(
        select(BoardColumn)
        .where(BoardColumn.project_id == project.id)
        .order_by(BoardColumn.order)
    )
    return ColumnListResponse(
        columns=[ColumnResponse.model_validate(c) for c in result.scalars().all()]
    )


# =============================================================================
# Project Tasks
# =============================================================================

@router.get("/{project_id}/tasks", response_model=TaskListResponse)
async def list_project_tasks(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """List the live (not soft-deleted) tasks of a project."""
    project = await get_live_record(db, RecordType.PROJECT, project_id)

    result = await db.execute(
        select(Task)
        .where(
            Task.project_id == project.id,
            Task.deleted_at.is_(None),
        )
        .order_by(Task.created_at)
    )
    tasks = result.scalars().all()

    return TaskListResponse(
        tasks=[TaskResponse.model_validate(t) for t in tasks],
        total=len(tasks),
    )
