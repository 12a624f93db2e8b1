"""
API Dependencies

FastAPI providers for the caller identity and the request-scoped services.
Tests replace any of these through app.dependency_overrides.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from collections.abc import Callable
from datetime import datetime

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ezteach.accounts import (
    AccountDeletionOrchestrator,
    IdentityStore,
    ManagedAccountDeletionOrchestrator,
)
from ezteach.auth import CallerIdentity, CredentialStore, CredentialStoreClient, decode_bearer_token
from ezteach.core.database import get_db
from ezteach.leaderboards import LeaderboardAggregator, ScoreIngestion
from ezteach.leaderboards.aggregator import utc_now

bearer_scheme = HTTPBearer(auto_error=False)


async def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CallerIdentity | None:
    """Caller identified by the bearer token, or None.

    Operations decide for themselves whether a missing caller is an error.
    """
    if credentials is None:
        return None
    return decode_bearer_token(credentials.credentials)


def get_clock() -> Callable[[], datetime]:
    return utc_now


def get_credential_store() -> CredentialStore:
    return CredentialStoreClient.from_settings()


def get_identity_store(db: AsyncSession = Depends(get_db)) -> IdentityStore:
    return IdentityStore(db)


def get_aggregator(
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> LeaderboardAggregator:
    return LeaderboardAggregator.from_settings(db, clock=clock)


def get_score_ingestion(
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ScoreIngestion:
    return ScoreIngestion(db, clock=clock)


def get_account_deletion(
    db: AsyncSession = Depends(get_db),
    credentials: CredentialStore = Depends(get_credential_store),
    identity: IdentityStore = Depends(get_identity_store),
) -> AccountDeletionOrchestrator:
    return AccountDeletionOrchestrator(db, credentials=credentials, identity=identity)


def get_managed_account_deletion(
    db: AsyncSession = Depends(get_db),
    credentials: CredentialStore = Depends(get_credential_store),
    identity: IdentityStore = Depends(get_identity_store),
) -> ManagedAccountDeletionOrchestrator:
    return ManagedAccountDeletionOrchestrator(db, credentials=credentials, identity=identity)
