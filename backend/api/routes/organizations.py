"""
Organization API routes.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps_access import (
    get_organization_role,
    require_actor_id,
    verify_organization_delete,
)
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.organization import (
    OrganizationCreate,
    OrganizationListResponse,
    OrganizationResponse,
)
from api.schemas.recovery import CascadePurgeResponse, SoftDeleteResponse
from core.domain.recovery import RecordType
from core.domain.roles import OrganizationRoleName
from infrastructure.database.connection import get_db
from infrastructure.database.models import Organization, OrganizationRole
from services.organization_purge import purge_organization
from services.soft_delete import get_live_record, soft_delete_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.post("", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
async def create_organization(
    data: OrganizationCreate,
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Create an organization.

    The creator becomes its owner.
    """
    organization = Organization(
        name=data.name,
        description=data.description,
        owner_id=actor_id,
    )
    db.add(organization)
    await db.flush()  # Get organization ID

    db.add(
        OrganizationRole(
            organization_id=organization.id,
            user_id=actor_id,
            role=OrganizationRoleName.OWNER.value,
        )
    )
    await db.commit()

    logger.info("Organization %s created by %s", organization.id, actor_id)
    response = OrganizationResponse.model_validate(organization)
    response.my_role = OrganizationRoleName.OWNER.value
    return response


@router.get("", response_model=OrganizationListResponse)
async def list_organizations(
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    List live organizations the user owns or belongs to.
    """
    member_orgs = select(OrganizationRole.organization_id).where(
        OrganizationRole.user_id == actor_id
    )
    stmt = (
        select(Organization)
        .where(
            Organization.deleted_at.is_(None),
            or_(
                Organization.owner_id == actor_id,
                Organization.id.in_(member_orgs),
            ),
        )
        .order_by(Organization.created_at)
    )
    result = await db.execute(stmt)
    organizations = result.scalars().all()

    return OrganizationListResponse(
        organizations=[OrganizationResponse.model_validate(o) for o in organizations],
        total=len(organizations),
    )


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: str,
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a live organization with the user's role in it."""
    organization = await get_live_record(db, RecordType.ORGANIZATION, organization_id)

    response = OrganizationResponse.model_validate(organization)
    response.my_role = await get_organization_role(db, organization.id, actor_id)
    return response


@router.delete("/{organization_id}", response_model=SoftDeleteResponse)
async def delete_organization(
    organization_id: str,
    actor_id: Annotated[str, Depends(require_actor_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Delete an organization (soft delete).

    The organization stays restorable from the recovery center until its
    window closes. Its projects are left untouched.
    """
    organization = await get_live_record(db, RecordType.ORGANIZATION, organization_id)
    await verify_organization_delete(db, organization, actor_id)

    organization = await soft_delete_record(
        db, RecordType.ORGANIZATION, organization_id, actor_id
    )
    return SoftDeleteResponse(
        id=organization.id,
        type=RecordType.ORGANIZATION,
        deleted_at=organization.deleted_at,
        expires_at=organization.expires_at,
    )


@router.delete("/{organization_id}/permanent-delete", response_model=CascadePurgeResponse)
@limiter.shared_limit(get_rate_limit("permanent_delete"), scope="permanent_delete")
async def permanently_delete_organization(
    request: Request,
    organization_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Permanently delete an organization with all its projects, tasks, columns
    and roles in one transaction. Irreversible.
    """
    outcome = await purge_organization(db, organization_id)
    return CascadePurgeResponse(
        message="Organization and all related data permanently deleted",
        organization_id=outcome.organization_id,
        projects=outcome.projects,
        tasks=outcome.tasks,
        columns=outcome.columns,
        roles=outcome.roles,
    )
