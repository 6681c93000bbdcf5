"""
Project and board column API schemas.
"""

from typing import List, Optional

from pydantic import Field

from .common import CamelModel, UTCDateTime


# =============================================================================
# Project Schemas
# =============================================================================


class ProjectCreate(CamelModel):
    """Schema for creating a new project."""

    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    description: Optional[str] = Field(None, max_length=1000, description="Project description")
    organization_id: Optional[str] = Field(
        None, description="Owning organization (omit for a personal project)"
    )


class ProjectResponse(CamelModel):
    """Schema for project response."""

    id: str
    name: str
    description: Optional[str] = None
    owner_id: str
    organization_id: Optional[str] = None
    created_at: UTCDateTime
    updated_at: Optional[UTCDateTime] = None


class ProjectListResponse(CamelModel):
    projects: List[ProjectResponse]
    total: int


# =============================================================================
# Column Schemas
# =============================================================================


class ColumnCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    order: Optional[int] = Field(None, ge=0, description="Position (appended when omitted)")


class ColumnResponse(CamelModel):
    id: str
    project_id: str
    title: str
    order: int


class ColumnListResponse(CamelModel):
    columns: List[ColumnResponse]
