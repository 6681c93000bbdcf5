"""
Organization API schemas.
"""

from typing import List, Optional

from pydantic import Field

from .common import CamelModel, UTCDateTime


class OrganizationCreate(CamelModel):
    """Schema for creating an organization."""

    name: str = Field(..., min_length=1, max_length=255, description="Organization name")
    description: Optional[str] = Field(None, max_length=1000)


class OrganizationResponse(CamelModel):
    """Schema for organization response."""

    id: str
    name: str
    description: Optional[str] = None
    owner_id: str
    created_at: UTCDateTime
    updated_at: Optional[UTCDateTime] = None

    # Role of the requesting user (only when known)
    my_role: Optional[str] = None


class OrganizationListResponse(CamelModel):
    organizations: List[OrganizationResponse]
    total: int
