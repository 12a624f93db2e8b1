"""
Content Models

User-authored records removed along with their author's account.
"""

from __future__ import annotations

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, StringIdMixin, TimestampMixin


class LessonPlan(Base, StringIdMixin, TimestampMixin):
    """Lesson plan authored by one teacher account."""

    __tablename__ = "lesson_plans"
    __table_args__ = (Index("idx_lesson_plans_teacher", "teacher_id"),)

    teacher_id: Mapped[str] = mapped_column(
        String(128), nullable=False, comment="User id of the authoring teacher"
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)


class SupportClaim(Base, StringIdMixin, TimestampMixin):
    """Support request filed by a user."""

    __tablename__ = "support_claims"
    __table_args__ = (Index("idx_support_claims_user", "user_id"),)

    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    subject: Mapped[str] = mapped_column(String(300), nullable=False, default="")
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
