"""Initial account and leaderboard schema

Revision ID: 3f2a9c1d7b44
Revises:
Create Date: 2026-10-16 09:00:00.000000+00:00

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b44"  # pragma: allowlist secret
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(length=128), primary_key=True, comment="Opaque document id")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Creation timestamp (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Last update timestamp (UTC)",
        ),
    ]


def _profile(name: str) -> None:
    op.create_table(
        name,
        _id(),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("school_id", sa.String(length=128), nullable=True),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        *_timestamps(),
    )
    op.create_index(f"idx_{name}_user", name, ["user_id"])


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("active_school_id", sa.String(length=128), nullable=True),
        sa.Column("district_id", sa.String(length=128), nullable=True),
        *_timestamps(),
    )

    _profile("teachers")
    _profile("subs")

    op.create_table(
        "parents",
        _id(),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_parents_user", "parents", ["user_id"])

    op.create_table(
        "parent_student_links",
        _id(),
        sa.Column("parent_user_id", sa.String(length=128), nullable=False),
        sa.Column("student_id", sa.String(length=128), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_parent_links_parent", "parent_student_links", ["parent_user_id"])
    op.create_index("idx_parent_links_student", "parent_student_links", ["student_id"])

    op.create_table(
        "students",
        _id(),
        sa.Column("user_id", sa.String(length=128), nullable=True),
        sa.Column("school_id", sa.String(length=128), nullable=True),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("grade_level", sa.SmallInteger(), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_students_user", "students", ["user_id"])
    op.create_index("idx_students_school", "students", ["school_id"])

    op.create_table(
        "districts",
        _id(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("owner_user_id", sa.String(length=128), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "schools",
        _id(),
        sa.Column("name", sa.String(length=300), nullable=False),
        sa.Column("district_id", sa.String(length=128), nullable=True),
        sa.Column("owner_user_id", sa.String(length=128), nullable=True),
        sa.Column("student_count", sa.Integer(), server_default="0", nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "conversations",
        _id(),
        sa.Column("title", sa.String(length=200), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "conversation_participants",
        sa.Column(
            "conversation_id",
            sa.String(length=128),
            sa.ForeignKey("conversations.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("user_id", sa.String(length=128), primary_key=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.UniqueConstraint("conversation_id", "user_id"),
    )
    op.create_index(
        "idx_conversation_participants_user", "conversation_participants", ["user_id"]
    )

    op.create_table(
        "lesson_plans",
        _id(),
        sa.Column("teacher_id", sa.String(length=128), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_lesson_plans_teacher", "lesson_plans", ["teacher_id"])

    op.create_table(
        "support_claims",
        _id(),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=True),
        sa.Column("subject", sa.String(length=300), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_support_claims_user", "support_claims", ["user_id"])

    op.create_table(
        "score_events",
        _id(),
        sa.Column("game_id", sa.String(length=100), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("elapsed_seconds", sa.Float(), nullable=True),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("school_id", sa.String(length=128), nullable=True),
        sa.Column("school_name", sa.String(length=300), nullable=True),
        sa.Column("grade", sa.String(length=30), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Server timestamp (UTC)",
        ),
        sa.CheckConstraint("score >= 0", name="check_score_non_negative"),
    )
    op.create_index("idx_score_events_game_created", "score_events", ["game_id", "created_at"])
    op.create_index(
        "idx_score_events_school_created", "score_events", ["school_id", "created_at"]
    )
    op.create_index("idx_score_events_created", "score_events", ["created_at"])


def downgrade() -> None:
    for table in (
        "score_events",
        "support_claims",
        "lesson_plans",
        "conversation_participants",
        "conversations",
        "schools",
        "districts",
        "students",
        "parent_student_links",
        "parents",
        "subs",
        "teachers",
        "users",
    ):
        op.drop_table(table)
