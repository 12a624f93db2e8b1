"""
User Models

Identity records and the role-specific profiles that hang off them.
Profiles carry a plain `user_id` back-reference: the identity store is owned
elsewhere, so the link is not an enforced foreign key.
"""

from __future__ import annotations

from sqlalchemy import Enum, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ezteach.core.enums import UserRole

from .base import Base, StringIdMixin, TimestampMixin


class User(Base, StringIdMixin, TimestampMixin):
    """Identity store record, keyed by the authentication uid."""

    __tablename__ = "users"

    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            length=20,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
    )
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Scope
    active_school_id: Mapped[str | None] = mapped_column(
        String(128), nullable=True, comment="School the user is currently acting for"
    )
    district_id: Mapped[str | None] = mapped_column(
        String(128), nullable=True, comment="Set for district admins"
    )


class Teacher(Base, StringIdMixin, TimestampMixin):
    """Teacher profile."""

    __tablename__ = "teachers"
    __table_args__ = (Index("idx_teachers_user", "user_id"),)

    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    school_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)


class Sub(Base, StringIdMixin, TimestampMixin):
    """Substitute teacher / paraeducator profile."""

    __tablename__ = "subs"
    __table_args__ = (Index("idx_subs_user", "user_id"),)

    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    school_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)


class Parent(Base, StringIdMixin, TimestampMixin):
    """Parent / guardian profile."""

    __tablename__ = "parents"
    __table_args__ = (Index("idx_parents_user", "user_id"),)

    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)


class ParentStudentLink(Base, StringIdMixin, TimestampMixin):
    """Many-to-many link between a parent user and a student profile."""

    __tablename__ = "parent_student_links"
    __table_args__ = (
        Index("idx_parent_links_parent", "parent_user_id"),
        Index("idx_parent_links_student", "student_id"),
    )

    parent_user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    student_id: Mapped[str] = mapped_column(String(128), nullable=False)
