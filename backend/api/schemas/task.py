"""
Task API schemas.
"""

from typing import List, Optional

from pydantic import Field

from infrastructure.database.models.task import TaskPriority

from .common import CamelModel, UTCDateTime


class TaskCreate(CamelModel):
    """Schema for creating a task."""

    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=10000)
    priority: TaskPriority = TaskPriority.MEDIUM
    project_id: Optional[str] = Field(None, description="Omit for a personal task")
    column_id: Optional[str] = None
    assignee_id: Optional[str] = None
    due_date: Optional[UTCDateTime] = None


class TaskResponse(CamelModel):
    """Schema for task response."""

    id: str
    title: str
    description: Optional[str] = None
    priority: str
    owner_id: str
    assignee_id: Optional[str] = None
    project_id: Optional[str] = None
    column_id: Optional[str] = None
    organization_id: Optional[str] = None
    due_date: Optional[UTCDateTime] = None
    created_at: UTCDateTime
    updated_at: Optional[UTCDateTime] = None


class TaskListResponse(CamelModel):
    tasks: List[TaskResponse]
    total: int
