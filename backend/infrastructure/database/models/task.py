"""
Task database model.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, SoftDeleteMixin, TimestampMixin


class TaskPriority(str, Enum):
    """Task priority enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base, TimestampMixin, SoftDeleteMixin):
    """Task model. Tasks without a project are personal tasks."""

    __tablename__ = "tasks"

    # Primary key
    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    priority: Mapped[str] = mapped_column(
        String(20), default=TaskPriority.MEDIUM.value, nullable=False
    )
    due_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    owner_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    assignee_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True, index=True)

    # A purged project leaves its tasks behind as personal tasks
    project_id: Mapped[Optional[str]] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    column_id: Mapped[Optional[str]] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("columns.id", ondelete="SET NULL"),
        nullable=True,
    )
    # Copied from the project on creation so org-scoped queries skip a join
    organization_id: Mapped[Optional[str]] = mapped_column(
        UUID(as_uuid=False), nullable=True, index=True
    )

    __table_args__ = (
        Index("ix_tasks_project_deleted", "project_id", "deleted_at"),
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title}, project_id={self.project_id})>"
