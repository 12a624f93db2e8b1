"""
Student Models

Student profiles managed by schools.
"""

from __future__ import annotations

from sqlalchemy import Index, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, StringIdMixin, TimestampMixin


class Student(Base, StringIdMixin, TimestampMixin):
    """Student profile.

    `user_id` is set once the student has a login of their own; younger
    students may exist only as a roster entry.
    """

    __tablename__ = "students"
    __table_args__ = (
        Index("idx_students_user", "user_id"),
        Index("idx_students_school", "school_id"),
    )

    user_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    school_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    grade_level: Mapped[int | None] = mapped_column(
        SmallInteger, nullable=True, comment="0 = Pre-K, 1 = Kindergarten, 2..13 = 1st..12th"
    )
