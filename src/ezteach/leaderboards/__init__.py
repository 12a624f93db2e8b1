"""Game score ingestion and leaderboard aggregation."""

from .aggregator import (
    PLACEHOLDER_NAME,
    AggregateMode,
    LeaderboardAggregator,
    LeaderboardRank,
    aggregate_scores,
)
from .ingestion import ScoreIngestion
from .windows import start_of_month, start_of_week, window_start

__all__ = [
    "PLACEHOLDER_NAME",
    "AggregateMode",
    "LeaderboardAggregator",
    "LeaderboardRank",
    "aggregate_scores",
    "ScoreIngestion",
    "start_of_month",
    "start_of_week",
    "window_start",
]
