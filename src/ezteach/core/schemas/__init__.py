"""Pydantic schemas for API validation."""

from .accounts import (
    DeleteManagedAccountRequest,
    DeleteManagedAccountResponse,
    DeleteOwnAccountResponse,
)
from .leaderboards import (
    LeaderboardRankSchema,
    LeaderboardResponse,
    ScoreSubmit,
    ScoreSubmitResponse,
)

__all__ = [
    # Accounts
    "DeleteOwnAccountResponse",
    "DeleteManagedAccountRequest",
    "DeleteManagedAccountResponse",
    # Leaderboards
    "ScoreSubmit",
    "ScoreSubmitResponse",
    "LeaderboardRankSchema",
    "LeaderboardResponse",
]
