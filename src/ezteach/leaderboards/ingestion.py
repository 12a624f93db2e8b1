"""
Score Ingestion

Appends one ScoreEvent per completed play, always attributed to the caller.
Submissions without a caller are dropped silently so that gameplay is never
interrupted by a lost session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ezteach.auth import CallerIdentity
from ezteach.core.errors import InternalError
from ezteach.core.models import School, ScoreEvent, Student, User
from ezteach.core.validation import (
    validate_display_name,
    validate_elapsed_seconds,
    validate_game_id,
    validate_score,
)

from .aggregator import utc_now
from .names import format_leaderboard_name, grade_label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerSnapshot:
    """Name, school and grade recorded alongside a score."""

    display_name: str | None = None
    school_id: str | None = None
    school_name: str | None = None
    grade: str | None = None


class ScoreIngestion:
    """Records score submissions."""

    def __init__(self, session: AsyncSession, *, clock: Callable[[], datetime] = utc_now):
        self.session = session
        self.clock = clock

    async def submit(
        self,
        caller: CallerIdentity | None,
        game_id: str,
        score: int,
        elapsed_seconds: float | None = None,
        display_name: str | None = None,
    ) -> ScoreEvent | None:
        """Append a score event for the caller.

        Args:
            caller: Authenticated caller; the event's user id always comes from here
            game_id: Game identifier
            score: Non-negative integer score
            elapsed_seconds: Optional play time
            display_name: Optional name snapshot; resolved from the caller's
                profile when omitted

        Returns:
            The stored ScoreEvent, or None when there is no caller

        Raises:
            InvalidArgumentError: Malformed game id, score or elapsed time
            InternalError: The event could not be stored
        """
        if caller is None:
            logger.debug("Dropping score submission without caller")
            return None

        game_id = validate_game_id(game_id)
        score = validate_score(score)
        elapsed_seconds = validate_elapsed_seconds(elapsed_seconds)
        display_name = validate_display_name(display_name)

        snapshot = await self._snapshot(caller.uid)

        event = ScoreEvent(
            game_id=game_id,
            user_id=caller.uid,
            score=score,
            elapsed_seconds=elapsed_seconds,
            display_name=display_name or snapshot.display_name,
            school_id=snapshot.school_id,
            school_name=snapshot.school_name,
            grade=snapshot.grade,
            created_at=self.clock(),
        )

        try:
            self.session.add(event)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to store score for {caller.uid}", exc_info=True)
            raise InternalError() from e

        logger.info(
            f"Score recorded: {game_id} {score}",
            extra={"game_id": game_id, "uid": caller.uid, "score": score},
        )
        return event

    async def _snapshot(self, uid: str) -> PlayerSnapshot:
        """Collect name, school and grade from the student profile and user record."""
        student_result = await self.session.execute(
            select(Student).where(Student.user_id == uid).limit(1)
        )
        student = student_result.scalar_one_or_none()
        user_result = await self.session.execute(select(User).where(User.id == uid))
        user = user_result.scalar_one_or_none()

        name = None
        if student is not None:
            name = format_leaderboard_name(student.first_name, student.last_name)
        if name is None and user is not None:
            name = format_leaderboard_name(user.first_name, user.last_name)

        school_id = student.school_id if student is not None else None
        if not school_id and user is not None:
            school_id = user.active_school_id

        school_name = None
        if school_id:
            school_result = await self.session.execute(
                select(School.name).where(School.id == school_id)
            )
            school_name = school_result.scalar_one_or_none()

        return PlayerSnapshot(
            display_name=name,
            school_id=school_id or None,
            school_name=school_name,
            grade=grade_label(student.grade_level) if student is not None else None,
        )
