"""
Shared schema building blocks.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from infrastructure.database.models.base import as_utc


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    return as_utc(value)


# Datetimes always serialise with an explicit UTC offset
UTCDateTime = Annotated[datetime, AfterValidator(_utc)]


class CamelModel(BaseModel):
    """Base model with camelCase JSON keys; snake_case names are accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel):
    """Generic acknowledgement."""

    success: bool = True
    message: Optional[str] = None
