"""
Account API Endpoints

Self-service account deletion and admin-managed account removal.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends

from ezteach.accounts import AccountDeletionOrchestrator, ManagedAccountDeletionOrchestrator
from ezteach.api.deps import get_account_deletion, get_caller, get_managed_account_deletion
from ezteach.auth import CallerIdentity
from ezteach.core.errors import UnauthenticatedError
from ezteach.core.schemas import (
    DeleteManagedAccountRequest,
    DeleteManagedAccountResponse,
    DeleteOwnAccountResponse,
)

router = APIRouter()


@router.post("/me/delete", response_model=DeleteOwnAccountResponse)
async def delete_own_account(
    caller: CallerIdentity | None = Depends(get_caller),
    orchestrator: AccountDeletionOrchestrator = Depends(get_account_deletion),
) -> DeleteOwnAccountResponse:
    """Delete the caller's own account and all dependent records.

    Takes no target: the account deleted is always the caller's.
    """
    result = await orchestrator.delete_own_account(caller)
    return DeleteOwnAccountResponse(deleted_user_id=result.deleted_user_id)


@router.post("/managed/delete", response_model=DeleteManagedAccountResponse)
async def delete_managed_account(
    request: DeleteManagedAccountRequest,
    caller: CallerIdentity | None = Depends(get_caller),
    orchestrator: ManagedAccountDeletionOrchestrator = Depends(get_managed_account_deletion),
) -> DeleteManagedAccountResponse:
    """Remove a student, teacher or staff account from a school."""
    if caller is None:
        raise UnauthenticatedError()

    result = await orchestrator.delete_managed_account(
        caller, request.account_id, request.account_type, request.school_id
    )
    return DeleteManagedAccountResponse(
        deleted_id=result.deleted_id, account_type=result.account_type
    )
