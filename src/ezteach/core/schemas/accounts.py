"""
Account Schemas

Pydantic models for account deletion requests and results.
"""

from pydantic import BaseModel, Field

from ezteach.core.enums import ManagedAccountType


class DeleteOwnAccountResponse(BaseModel):
    """Result of self-service deletion."""

    deleted_user_id: str


class DeleteManagedAccountRequest(BaseModel):
    """Admin request to remove a managed account."""

    account_id: str = Field(..., min_length=1, max_length=128)
    account_type: ManagedAccountType
    school_id: str = Field(..., min_length=1, max_length=128)


class DeleteManagedAccountResponse(BaseModel):
    """Result of managed account deletion."""

    deleted_id: str
    account_type: ManagedAccountType
