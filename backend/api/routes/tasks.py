"""
Task API routes.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps_access import require_actor_id, verify_task_delete
from api.schemas.recovery import SoftDeleteResponse
from api.schemas.task import TaskCreate, TaskResponse
from core.domain.recovery import NotFoundError, RecordType
from infrastructure.database.connection import get_db
from infrastructure.database.models import BoardColumn, Task
from services.soft_delete import get_live_record, is_valid_id, soft_delete_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Create a task.

    Project tasks inherit the project's organization; the optional column
    must belong to the same project.
    """
    organization_id = None
    if data.project_id:
        project = await get_live_record(db, RecordType.PROJECT, data.project_id)
        organization_id = project.organization_id

        if data.column_id:
            column = None
            if is_valid_id(data.column_id):
                result = await db.execute(
                    select(BoardColumn).where(
                        BoardColumn.id == data.column_id,
                        BoardColumn.project_id == project.id,
                    )
                )
                column = result.scalar_one_or_none()
            if column is None:
                raise NotFoundError("Column not found")
    elif data.column_id:
        raise NotFoundError("Column not found")

    task = Task(
        title=data.title,
        description=data.description,
        priority=data.priority.value,
        due_date=data.due_date,
        owner_id=actor_id,
        assignee_id=data.assignee_id,
        project_id=data.project_id,
        column_id=data.column_id,
        organization_id=organization_id,
    )
    db.add(task)
    await db.commit()

    logger.info("Task %s created by %s", task.id, actor_id)
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a live task."""
    task = await get_live_record(db, RecordType.TASK, task_id)
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=SoftDeleteResponse)
async def delete_task(
    task_id: str,
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Delete a task (soft delete).

    The task disappears from boards and can be restored from the recovery
    center for the length of the recovery window.
    """
    task = await get_live_record(db, RecordType.TASK, task_id)
    await verify_task_delete(db, task, actor_id)

    task = await soft_delete_record(db, RecordType.TASK, task_id, actor_id)
    return SoftDeleteResponse(
        id=task.id,
        type=RecordType.TASK,
        deleted_at=task.deleted_at,
        expires_at=task.expires_at,
    )
