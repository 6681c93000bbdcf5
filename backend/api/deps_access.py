"""
Actor and permission dependencies.

Authentication happens upstream (external identity provider); routes receive
the acting user's id as the `userId` query parameter.
"""

from typing import Annotated, Optional

from fastapi import Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.recovery import PermissionDeniedError, ValidationError
from core.domain.roles import Permission, has_permission
from infrastructure.database.models import Organization, OrganizationRole, Project, Task


async def require_actor_id(
    user_id: Annotated[Optional[str], Query(alias="userId")] = None,
) -> str:
    """
    Dependency returning the acting user's id.

    Raises:
        ValidationError: 400 if userId is missing or blank
    """
    if not user_id or not user_id.strip():
        raise ValidationError("User ID is required")
    return user_id.strip()


async def get_organization_role(
    db: AsyncSession,
    organization_id: Optional[str],
    user_id: str,
) -> Optional[str]:
    """
    Get the role a user holds in an organization.

    Returns:
        Role string, or None when the user has no role (or there is no organization)
    """
    if not organization_id:
        return None

    stmt = select(OrganizationRole.role).where(
        OrganizationRole.organization_id == organization_id,
        OrganizationRole.user_id == user_id,
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def verify_task_delete(db: AsyncSession, task: Task, actor_id: str) -> None:
    """
    Verify that a user can delete a task.

    Allowed for the task's creator, or for a role granting tasks.delete in the
    task's organization.

    Raises:
        PermissionDeniedError: 403 otherwise
    """
    if task.owner_id == actor_id:
        return

    role = await get_organization_role(db, task.organization_id, actor_id)
    if has_permission(role, Permission.TASKS_DELETE):
        return

    raise PermissionDeniedError("You do not have permission to delete this task")


async def verify_project_delete(db: AsyncSession, project: Project, actor_id: str) -> None:
    """
    Verify that a user can delete a project.

    Allowed for the project owner, or for a role granting projects.delete in
    the project's organization.

    Raises:
        PermissionDeniedError: 403 otherwise
    """
    if project.owner_id == actor_id:
        return

    role = await get_organization_role(db, project.organization_id, actor_id)
    if has_permission(role, Permission.PROJECTS_DELETE):
        return

    raise PermissionDeniedError("You do not have permission to delete this project")


async def verify_organization_delete(
    db: AsyncSession,
    organization: Organization,
    actor_id: str,
) -> None:
    """
    Verify that a user can delete an organization (owner only).

    Raises:
        PermissionDeniedError: 403 otherwise
    """
    if organization.owner_id == actor_id:
        return

    role = await get_organization_role(db, organization.id, actor_id)
    if has_permission(role, Permission.ORGANIZATION_DELETE):
        return

    raise PermissionDeniedError("Only the organization owner can delete it")


async def verify_organization_member(
    db: AsyncSession,
    organization: Organization,
    actor_id: str,
) -> None:
    """
    Verify that a user owns or holds a role in an organization.

    Raises:
        PermissionDeniedError: 403 otherwise
    """
    if organization.owner_id == actor_id:
        return
    if await get_organization_role(db, organization.id, actor_id) is not None:
        return
    raise PermissionDeniedError("You are not a member of this organization")
