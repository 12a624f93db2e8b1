"""
SQLAlchemy Base Model and Mixins

Provides base class and common mixins for all EZTeach models.
"""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, event, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    """Generate an opaque document id."""
    return str(uuid4())


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class StringIdMixin:
    """Mixin for opaque string primary keys.

    Users are keyed by their authentication uid; every other record gets a
    generated UUID string.
    """

    id: Mapped[str] = mapped_column(
        String(128), primary_key=True, default=new_id, comment="Opaque document id"
    )


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps.

    All timestamps use UTC (timezone-aware).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
        comment="Creation timestamp (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
        comment="Last update timestamp (UTC)",
    )


# Event listeners to auto-generate ids and timestamps for in-memory objects
@event.listens_for(StringIdMixin, "init", propagate=True)
def receive_init_id(target, args, kwargs):  # type: ignore[no-untyped-def]
    """Auto-generate an id on instance creation if not provided."""
    if "id" not in kwargs:
        target.id = new_id()


@event.listens_for(TimestampMixin, "init", propagate=True)
def receive_init_timestamps(target, args, kwargs):  # type: ignore[no-untyped-def]
    """Auto-generate timestamps on instance creation if not provided."""
    now = datetime.now(UTC)
    if "created_at" not in kwargs:
        target.created_at = now
    if "updated_at" not in kwargs:
        target.updated_at = now
