"""
Leaderboard time windows.

Month and week windows start at local midnight in the configured timezone and
are returned in UTC for querying.
"""

from __future__ import annotations

from datetime import UTC, datetime, time, timedelta, tzinfo
from typing import assert_never

from ezteach.core.enums import TimeWindow


def start_of_month(now: datetime, tz: tzinfo) -> datetime:
    """Local midnight on the 1st of the month containing `now`."""
    local = now.astimezone(tz)
    return datetime.combine(local.date().replace(day=1), time.min, tzinfo=tz)


def start_of_week(now: datetime, tz: tzinfo, first_weekday: int) -> datetime:
    """Local midnight on the most recent `first_weekday` (0=Monday .. 6=Sunday)."""
    local = now.astimezone(tz)
    days_back = (local.weekday() - first_weekday) % 7
    return datetime.combine(local.date() - timedelta(days=days_back), time.min, tzinfo=tz)


def window_start(
    window: TimeWindow, *, now: datetime, tz: tzinfo, first_weekday: int
) -> datetime | None:
    """Inclusive lower bound of a window in UTC (None = unbounded)."""
    match window:
        case TimeWindow.ALL_TIME:
            return None
        case TimeWindow.CURRENT_MONTH:
            return start_of_month(now, tz).astimezone(UTC)
        case TimeWindow.CURRENT_WEEK:
            return start_of_week(now, tz, first_weekday).astimezone(UTC)
        case _:
            assert_never(window)
