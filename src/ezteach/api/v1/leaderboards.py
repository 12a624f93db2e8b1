"""
Leaderboard API Endpoints

Score submission and public leaderboards (per game and all games).
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, Query, status

from ezteach.api.deps import get_aggregator, get_caller, get_score_ingestion
from ezteach.auth import CallerIdentity
from ezteach.core.enums import TimeWindow
from ezteach.core.schemas import (
    LeaderboardRankSchema,
    LeaderboardResponse,
    ScoreSubmit,
    ScoreSubmitResponse,
)
from ezteach.leaderboards import LeaderboardAggregator, LeaderboardRank, ScoreIngestion

router = APIRouter()


def _public_entries(
    ranks: list[LeaderboardRank], caller: CallerIdentity | None
) -> list[LeaderboardRankSchema]:
    """Strip user ids, keeping only an "is this me" flag."""
    me = caller.uid if caller else None
    return [
        LeaderboardRankSchema(
            rank=r.rank,
            display_name=r.display_name,
            score=r.score,
            school_name=r.school_name,
            grade=r.grade,
            is_current_user=me is not None and r.user_id == me,
        )
        for r in ranks
    ]


@router.post(
    "/scores", response_model=ScoreSubmitResponse, status_code=status.HTTP_202_ACCEPTED
)
async def submit_score(
    submission: ScoreSubmit | None = None,
    caller: CallerIdentity | None = Depends(get_caller),
    ingestion: ScoreIngestion = Depends(get_score_ingestion),
) -> ScoreSubmitResponse:
    """Record a score for the caller.

    Fire and forget: without a valid session the submission is accepted and
    dropped, whatever its fields hold.
    """
    submission = submission or ScoreSubmit()
    event = await ingestion.submit(
        caller,
        submission.game_id,
        submission.score,
        elapsed_seconds=submission.elapsed_seconds,
        display_name=submission.display_name,
    )
    if event is None:
        return ScoreSubmitResponse(recorded=False)
    return ScoreSubmitResponse(recorded=True, created_at=event.created_at)


@router.get("/games/{game_id}", response_model=LeaderboardResponse)
async def get_game_leaderboard(
    game_id: str,
    window: TimeWindow = Query(TimeWindow.ALL_TIME),
    limit: int | None = Query(None, description="Rows to return (default 30)"),
    school_id: str | None = Query(None, description="Only scores recorded at this school"),
    caller: CallerIdentity | None = Depends(get_caller),
    aggregator: LeaderboardAggregator = Depends(get_aggregator),
) -> LeaderboardResponse:
    """Best single score per player for one game."""
    ranks = await aggregator.per_game(game_id, window, limit, school_id=school_id)
    return LeaderboardResponse(
        window=window,
        game_id=game_id,
        school_id=school_id,
        entries=_public_entries(ranks, caller),
    )


@router.get("/general", response_model=LeaderboardResponse)
async def get_general_leaderboard(
    window: TimeWindow = Query(TimeWindow.ALL_TIME),
    limit: int | None = Query(None, description="Rows to return (default 100)"),
    school_id: str | None = Query(None, description="Only scores recorded at this school"),
    caller: CallerIdentity | None = Depends(get_caller),
    aggregator: LeaderboardAggregator = Depends(get_aggregator),
) -> LeaderboardResponse:
    """Total score per player across all games."""
    ranks = await aggregator.all_games(window, limit, school_id=school_id)
    return LeaderboardResponse(
        window=window,
        school_id=school_id,
        entries=_public_entries(ranks, caller),
    )
