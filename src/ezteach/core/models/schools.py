"""
School Models

Districts and schools. A district admin administers every school whose
`district_id` points at their district.
"""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, StringIdMixin, TimestampMixin


class District(Base, StringIdMixin, TimestampMixin):
    """School district covering one or more schools."""

    __tablename__ = "districts"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    owner_user_id: Mapped[str | None] = mapped_column(
        String(128), nullable=True, comment="District admin who created the district"
    )


class School(Base, StringIdMixin, TimestampMixin):
    """Individual schools."""

    __tablename__ = "schools"

    name: Mapped[str] = mapped_column(String(300), nullable=False)
    district_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    owner_user_id: Mapped[str | None] = mapped_column(
        String(128), nullable=True, comment="School admin account"
    )
    student_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
