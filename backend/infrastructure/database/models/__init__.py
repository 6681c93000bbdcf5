"""
SQLAlchemy database models.
"""

from .base import Base, SoftDeleteMixin, TimestampMixin
from .organization import Organization, OrganizationRole
from .project import BoardColumn, Project
from .task import Task, TaskPriority

__all__ = [
    "Base",
    "TimestampMixin",
    "SoftDeleteMixin",
    "Organization",
    "OrganizationRole",
    "Project",
    "BoardColumn",
    "Task",
    "TaskPriority",
]
