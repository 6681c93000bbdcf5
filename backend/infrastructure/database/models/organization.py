"""
Organization and organization role database models.
"""

from typing import Optional
from uuid import uuid4

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from core.domain.roles import OrganizationRoleName

from .base import Base, SoftDeleteMixin, TimestampMixin


class Organization(Base, TimestampMixin, SoftDeleteMixin):
    """Organization model (top-level tenant that owns projects)."""

    __tablename__ = "organizations"

    # Primary key
    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Basic info
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Owner (auth provider user id of the creator)
    owner_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name={self.name})>"


class OrganizationRole(Base, TimestampMixin):
    """Role a user holds inside an organization."""

    __tablename__ = "organization_roles"

    # Primary key
    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    organization_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    role: Mapped[str] = mapped_column(
        String(50), default=OrganizationRoleName.MEMBER.value, nullable=False
    )

    __table_args__ = (
        Index("ix_organization_roles_org_user", "organization_id", "user_id", unique=True),
    )

    def __repr__(self) -> str:
        return (
            f"<OrganizationRole(organization_id={self.organization_id}, "
            f"user_id={self.user_id}, role={self.role})>"
        )
