"""
Leaderboard Schemas

Pydantic models for score submission and public leaderboard responses.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ezteach.core.enums import TimeWindow


class ScoreSubmit(BaseModel):
    """Score submitted at the end of a play session.

    There is no user id field: scores are always attributed to the caller.
    Fields are checked by ScoreIngestion once a caller is known, so a
    signed-out client never gets an error back.
    """

    game_id: Any = Field(None, description="Game identifier")
    score: Any = Field(None, description="Non-negative integer score")
    elapsed_seconds: Any = Field(None, description="Play time in seconds")
    display_name: Any = Field(None, description="Name snapshot")


class ScoreSubmitResponse(BaseModel):
    """Acknowledgement of a fire-and-forget submission."""

    recorded: bool
    created_at: datetime | None = None


class LeaderboardRankSchema(BaseModel):
    """Public leaderboard row (no raw user ids)."""

    rank: int
    display_name: str
    score: int
    school_name: str = ""
    grade: str = ""
    is_current_user: bool = False


class LeaderboardResponse(BaseModel):
    """Ranked leaderboard for one window."""

    window: TimeWindow
    game_id: str | None = None
    school_id: str | None = None
    entries: list[LeaderboardRankSchema]
