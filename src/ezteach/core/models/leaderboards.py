"""
Leaderboard Models

Append-only log of completed game plays. Rankings are computed on read.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, StringIdMixin


class ScoreEvent(Base, StringIdMixin):
    """One score submission. Never updated or deleted."""

    __tablename__ = "score_events"
    __table_args__ = (
        CheckConstraint("score >= 0", name="check_score_non_negative"),
        Index("idx_score_events_game_created", "game_id", "created_at"),
        Index("idx_score_events_school_created", "school_id", "created_at"),
        Index("idx_score_events_created", "created_at"),
    )

    game_id: Mapped[str] = mapped_column(String(100), nullable=False)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    elapsed_seconds: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Snapshots taken at submission time
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    school_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    school_name: Mapped[str | None] = mapped_column(String(300), nullable=True)
    grade: Mapped[str | None] = mapped_column(String(30), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
        comment="Server timestamp (UTC)",
    )
