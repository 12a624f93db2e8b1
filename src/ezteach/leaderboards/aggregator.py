"""
Leaderboard Aggregator

Ranks players from the raw score log:
- per game: each player's best single score in the window
- all games: each player's total across every game in the window

Equal scores keep the order in which players first appear in the log; there
is no secondary tie-break key. Ranks are positions 1..n.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from enum import StrEnum
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ezteach.config import Settings, settings
from ezteach.core.enums import TimeWindow, parse_time_window
from ezteach.core.models import ScoreEvent
from ezteach.core.validation import validate_game_id, validate_limit, validate_optional_id

from .windows import window_start

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "Player"


def utc_now() -> datetime:
    return datetime.now(UTC)


class AggregateMode(StrEnum):
    """How a player's scores in the window combine."""

    BEST = "best"
    TOTAL = "total"


@dataclass(frozen=True)
class LeaderboardRank:
    """One ranked row. Computed on read, never stored."""

    rank: int
    user_id: str
    display_name: str
    score: int
    school_name: str = ""
    grade: str = ""


class ScoreRow(Protocol):
    user_id: str
    score: int
    display_name: str | None
    school_name: str | None
    grade: str | None


@dataclass
class _UserAggregate:
    user_id: str
    value: int = 0
    display_name: str | None = None
    school_name: str | None = None
    grade: str | None = None


def _present(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def aggregate_scores(rows: Iterable[ScoreRow], mode: AggregateMode) -> list[LeaderboardRank]:
    """Group rows by player and rank them.

    Rows must be in chronological order; the latest non-empty snapshot of
    display name, school and grade wins.
    """
    by_user: dict[str, _UserAggregate] = {}

    for row in rows:
        agg = by_user.get(row.user_id)
        if agg is None:
            agg = by_user[row.user_id] = _UserAggregate(user_id=row.user_id)

        match mode:
            case AggregateMode.BEST:
                agg.value = max(agg.value, row.score)
            case AggregateMode.TOTAL:
                agg.value += row.score

        if _present(row.display_name):
            agg.display_name = row.display_name
        if _present(row.school_name):
            agg.school_name = row.school_name
        if _present(row.grade):
            agg.grade = row.grade

    # sorted() is stable, also with reverse=True
    ordered = sorted(by_user.values(), key=lambda a: a.value, reverse=True)

    return [
        LeaderboardRank(
            rank=position,
            user_id=agg.user_id,
            display_name=agg.display_name or PLACEHOLDER_NAME,
            score=agg.value,
            school_name=agg.school_name or "",
            grade=agg.grade or "",
        )
        for position, agg in enumerate(ordered, start=1)
    ]


class LeaderboardAggregator:
    """Read-only leaderboard queries over the score log."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        tz: tzinfo = UTC,
        first_weekday: int = 0,
        clock: Callable[[], datetime] = utc_now,
        game_limit: int = 30,
        general_limit: int = 100,
        max_limit: int = 500,
    ):
        """Initialize aggregator.

        Args:
            session: Database session used for reads only
            tz: Timezone whose local midnight starts month/week windows
            first_weekday: First day of the week (0=Monday .. 6=Sunday)
            clock: Returns the current time
            game_limit: Default rows for per-game boards
            general_limit: Default rows for the all-games board
            max_limit: Largest accepted limit
        """
        self.session = session
        self.tz = tz
        self.first_weekday = first_weekday
        self.clock = clock
        self.game_limit = game_limit
        self.general_limit = general_limit
        self.max_limit = max_limit

    @classmethod
    def from_settings(
        cls,
        session: AsyncSession,
        *,
        config: Settings = settings,
        clock: Callable[[], datetime] = utc_now,
    ) -> LeaderboardAggregator:
        """Create aggregator from application settings."""
        return cls(
            session,
            tz=config.leaderboard_tz,
            first_weekday=config.first_weekday,
            clock=clock,
            game_limit=config.LEADERBOARD_GAME_LIMIT,
            general_limit=config.LEADERBOARD_GENERAL_LIMIT,
            max_limit=config.LEADERBOARD_MAX_LIMIT,
        )

    async def per_game(
        self,
        game_id: str,
        window: TimeWindow | str = TimeWindow.ALL_TIME,
        limit: int | None = None,
        *,
        school_id: str | None = None,
    ) -> list[LeaderboardRank]:
        """Best single score per player for one game.

        Raises:
            InvalidArgumentError: Bad game id, window, limit or school id
        """
        game_id = validate_game_id(game_id)
        window = parse_time_window(window)
        limit = validate_limit(limit, default=self.game_limit, maximum=self.max_limit)
        school_id = validate_optional_id(school_id, "schoolId")

        rows = await self._fetch(window, game_id=game_id, school_id=school_id)
        return aggregate_scores(rows, AggregateMode.BEST)[:limit]

    async def all_games(
        self,
        window: TimeWindow | str = TimeWindow.ALL_TIME,
        limit: int | None = None,
        *,
        school_id: str | None = None,
    ) -> list[LeaderboardRank]:
        """Total score per player across all games.

        Raises:
            InvalidArgumentError: Bad window, limit or school id
        """
        window = parse_time_window(window)
        limit = validate_limit(limit, default=self.general_limit, maximum=self.max_limit)
        school_id = validate_optional_id(school_id, "schoolId")

        rows = await self._fetch(window, school_id=school_id)
        return aggregate_scores(rows, AggregateMode.TOTAL)[:limit]

    def window_start(self, window: TimeWindow) -> datetime | None:
        """Inclusive UTC lower bound for a window at the current time."""
        return window_start(
            window, now=self.clock(), tz=self.tz, first_weekday=self.first_weekday
        )

    async def _fetch(
        self,
        window: TimeWindow,
        *,
        game_id: str | None = None,
        school_id: str | None = None,
    ) -> list[ScoreRow]:
        stmt = select(
            ScoreEvent.user_id,
            ScoreEvent.score,
            ScoreEvent.display_name,
            ScoreEvent.school_name,
            ScoreEvent.grade,
        )

        if game_id is not None:
            stmt = stmt.where(ScoreEvent.game_id == game_id)
        if school_id is not None:
            stmt = stmt.where(ScoreEvent.school_id == school_id)

        start = self.window_start(window)
        if start is not None:
            stmt = stmt.where(ScoreEvent.created_at >= start)

        stmt = stmt.order_by(ScoreEvent.created_at, ScoreEvent.id)

        result = await self.session.execute(stmt)
        rows = list(result.all())
        logger.debug(
            f"Fetched {len(rows)} score events",
            extra={"game_id": game_id, "school_id": school_id, "window": window.value},
        )
        return rows  # type: ignore[return-value]
