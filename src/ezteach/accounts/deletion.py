"""
Self-service account deletion.

Removes the caller's user record together with every dependent record in one
transaction, then deletes the login credential as a separate best-effort step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import assert_never

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ezteach.auth import CallerIdentity, CredentialDeletionResult, CredentialStore
from ezteach.core.enums import UserRole
from ezteach.core.errors import UnauthenticatedError
from ezteach.core.models import (
    Conversation,
    ConversationParticipant,
    LessonPlan,
    Parent,
    ParentStudentLink,
    Sub,
    SupportClaim,
    Teacher,
    User,
)

from .batch import WriteBatch
from .identity_store import IdentityStore

logger = logging.getLogger(__name__)

# Conversations with at most this many participants are removed with a participant
MAX_PARTICIPANTS_FOR_REMOVAL = 2


@dataclass(frozen=True)
class AccountDeletionResult:
    """Outcome of delete_own_account."""

    deleted_user_id: str
    credential: CredentialDeletionResult
    affected: dict[str, int] = field(default_factory=dict)


async def remove_credential(store: CredentialStore, uid: str) -> CredentialDeletionResult:
    """Delete a login credential after the data cascade has committed.

    A failed deletion is logged and returned, never raised: the data is
    already gone by the time this runs.
    """
    try:
        result = await store.delete_credential(uid)
    except Exception as e:
        logger.warning(
            f"Credential deletion raised for {uid}: {e!r}",
            exc_info=True,
            extra={"uid": uid},
        )
        return CredentialDeletionResult(uid=uid, deleted=False, error=repr(e))

    if not result.ok:
        logger.warning(
            f"Credential deletion failed for {uid}: {result.error}",
            extra={"uid": uid, "error": result.error},
        )
    return result


def mark_role_profiles(batch: WriteBatch, role: UserRole, uid: str) -> None:
    """Queue deletion of the role-specific profiles owned by a user."""
    match role:
        case UserRole.TEACHER:
            batch.delete("teachers", delete(Teacher).where(Teacher.user_id == uid))
        case UserRole.SUB:
            batch.delete("subs", delete(Sub).where(Sub.user_id == uid))
        case UserRole.PARENT:
            batch.delete("parents", delete(Parent).where(Parent.user_id == uid))
            batch.delete(
                "parent_student_links",
                delete(ParentStudentLink).where(ParentStudentLink.parent_user_id == uid),
            )
        case UserRole.STUDENT | UserRole.SCHOOL | UserRole.DISTRICT:
            pass
        case _:
            assert_never(role)


class AccountDeletionOrchestrator:
    """Deletes the calling user's own account."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        credentials: CredentialStore,
        identity: IdentityStore | None = None,
    ):
        self.session = session
        self.credentials = credentials
        self.identity = identity or IdentityStore(session)

    async def delete_own_account(self, caller: CallerIdentity | None) -> AccountDeletionResult:
        """Delete the caller's account and everything that depends on it.

        Deleting an account that is already gone succeeds; the cascade simply
        finds nothing left to remove.

        Args:
            caller: Authenticated caller (the only possible target)

        Returns:
            AccountDeletionResult with the deleted uid

        Raises:
            UnauthenticatedError: If there is no caller
            InternalError: If the cascade fails to commit (nothing is removed)
        """
        if caller is None:
            raise UnauthenticatedError()

        uid = caller.uid
        batch = WriteBatch()

        user = await self.identity.get_user(uid)
        role = user.role if user is not None else None
        if role is not None:
            mark_role_profiles(batch, role, uid)

        batch.delete("users", delete(User).where(User.id == uid))

        conversation_ids = await self._conversations_removed_with(uid)
        if conversation_ids:
            batch.delete(
                "conversation_participants",
                delete(ConversationParticipant).where(
                    ConversationParticipant.conversation_id.in_(conversation_ids)
                ),
            )
            batch.delete(
                "conversations", delete(Conversation).where(Conversation.id.in_(conversation_ids))
            )

        batch.delete("lesson_plans", delete(LessonPlan).where(LessonPlan.teacher_id == uid))
        batch.delete("support_claims", delete(SupportClaim).where(SupportClaim.user_id == uid))

        affected = await batch.commit(self.session)
        logger.info(
            f"Account deleted: {uid}",
            extra={"uid": uid, "role": role.value if role else None, "affected": affected},
        )

        credential = await remove_credential(self.credentials, uid)
        return AccountDeletionResult(deleted_user_id=uid, credential=credential, affected=affected)

    async def _conversations_removed_with(self, uid: str) -> list[str]:
        """Ids of the caller's conversations that have at most two participants.

        Group conversations are left alone and keep the departing id.
        """
        member_of = select(ConversationParticipant.conversation_id).where(
            ConversationParticipant.user_id == uid
        )
        stmt = (
            select(ConversationParticipant.conversation_id)
            .where(ConversationParticipant.conversation_id.in_(member_of))
            .group_by(ConversationParticipant.conversation_id)
            .having(func.count() <= MAX_PARTICIPANTS_FOR_REMOVAL)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
