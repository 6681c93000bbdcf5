"""
Declarative base and shared column mixins.
"""

from datetime import UTC, datetime, timedelta
from typing import Optional

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

Base = declarative_base()


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(UTC)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops the offset on storage)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class TimestampMixin:
    """Adds created_at / updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )


class SoftDeleteMixin:
    """
    Soft-delete columns shared by tasks, projects and organizations.

    A record is soft-deleted when deleted_at is set; it stays restorable
    until expires_at. The three fields are always set and cleared together.
    """

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    deleted_by: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    @property
    def is_deleted(self) -> bool:
        """Check if the record is soft-deleted."""
        return self.deleted_at is not None

    def is_recoverable(self, now: Optional[datetime] = None) -> bool:
        """Check if the record is soft-deleted and still inside its window."""
        if self.deleted_at is None or self.expires_at is None:
            return False
        return (now or utcnow()) < as_utc(self.expires_at)

    def mark_deleted(self, actor_id: str, now: datetime, window: timedelta) -> None:
        """Set the deletion fields in one go."""
        self.deleted_at = now
        self.expires_at = now + window
        self.deleted_by = actor_id
        self.updated_at = now

    def clear_deletion(self, now: datetime) -> None:
        """Clear the deletion fields in one go (restore)."""
        self.deleted_at = None
        self.expires_at = None
        self.deleted_by = None
        self.updated_at = now
