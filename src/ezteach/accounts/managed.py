"""
School/district managed account deletion.

Lets a school admin (or the district admin over that school) remove a student,
teacher or staff account.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import assert_never

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ezteach.auth import CallerIdentity, CredentialDeletionResult, CredentialStore
from ezteach.core.enums import ManagedAccountType, UserRole, parse_account_type
from ezteach.core.errors import InvalidArgumentError, PermissionDeniedError, UnauthenticatedError
from ezteach.core.models import School, Student, Teacher, User

from .batch import WriteBatch
from .deletion import remove_credential
from .identity_store import IdentityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManagedAccountDeletionResult:
    """Outcome of delete_managed_account."""

    deleted_id: str
    account_type: ManagedAccountType
    authorized_as: UserRole
    credential: CredentialDeletionResult | None = None
    affected: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ManagedTarget:
    """Where a managed account sits, and its login uid when it has one."""

    school_id: str | None
    user_id: str | None = None


def _require_id(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise InvalidArgumentError(f"{name} is required")
    return value.strip()


class ManagedAccountDeletionOrchestrator:
    """Deletes accounts on behalf of a school or district admin."""

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

    async def delete_managed_account(
        self,
        caller: CallerIdentity | None,
        account_id: str,
        account_type: ManagedAccountType | str,
        school_id: str,
    ) -> ManagedAccountDeletionResult:
        """Delete a student, teacher or staff account under a school.

        - student: profile and user record removed, school student_count - 1,
          then the login credential (best effort)
        - teacher: teacher profile only; the user record stays
        - staff: user record only

        An account that is already gone is reported as deleted without writing.

        Args:
            caller: Authenticated admin
            account_id: Student/teacher profile id, or user id for staff
            account_type: student, teacher or staff
            school_id: School the account belongs to

        Returns:
            ManagedAccountDeletionResult

        Raises:
            UnauthenticatedError: No caller
            InvalidArgumentError: Unknown account type or missing ids
            PermissionDeniedError: Caller does not administer the school, or the
                account is not under it
            InternalError: The batch failed to commit (nothing is removed)
        """
        if caller is None:
            raise UnauthenticatedError()

        kind = parse_account_type(account_type)
        account_id = _require_id(account_id, "accountId")
        school_id = _require_id(school_id, "schoolId")

        authorized_as = await self._authorize(caller, school_id)

        target = await self._find_target(kind, account_id)
        if target is None:
            # Already deleted (or never existed): nothing to write, no credential call
            logger.info(
                f"Managed {kind.value} account {account_id} not found, nothing to delete",
                extra={"account_id": account_id, "school_id": school_id, "caller": caller.uid},
            )
            return ManagedAccountDeletionResult(
                deleted_id=account_id, account_type=kind, authorized_as=authorized_as
            )
        if target.school_id != school_id:
            logger.info(
                f"Managed deletion denied: {account_id} is not under school {school_id}",
                extra={"account_id": account_id, "school_id": school_id, "caller": caller.uid},
            )
            raise PermissionDeniedError("Account does not belong to this school")

        batch = WriteBatch()
        credential_uid: str | None = None

        match kind:
            case ManagedAccountType.STUDENT:
                user_id = target.user_id or account_id
                enrolled = (
                    select(Student.id)
                    .where(Student.id == account_id, Student.school_id == school_id)
                    .exists()
                )
                # Counter first, and only while the profile is still there
                batch.update(
                    "schools",
                    update(School)
                    .where(School.id == school_id, enrolled)
                    .values(student_count=School.student_count - 1)
                    .execution_options(synchronize_session="fetch"),
                )
                batch.delete(
                    "students",
                    delete(Student).where(
                        Student.id == account_id, Student.school_id == school_id
                    ),
                )
                batch.delete("users", delete(User).where(User.id == user_id))
                credential_uid = user_id
            case ManagedAccountType.TEACHER:
                # User record intentionally kept
                batch.delete(
                    "teachers",
                    delete(Teacher).where(
                        Teacher.id == account_id, Teacher.school_id == school_id
                    ),
                )
            case ManagedAccountType.STAFF:
                batch.delete(
                    "users",
                    delete(User).where(User.id == account_id, User.active_school_id == school_id),
                )
            case _:
                assert_never(kind)

        affected = await batch.commit(self.session)
        logger.info(
            f"Managed {kind.value} account deleted: {account_id}",
            extra={
                "account_id": account_id,
                "account_type": kind.value,
                "school_id": school_id,
                "authorized_as": authorized_as.value,
                "caller": caller.uid,
                "affected": affected,
            },
        )

        credential = None
        if credential_uid is not None:
            credential = await remove_credential(self.credentials, credential_uid)

        return ManagedAccountDeletionResult(
            deleted_id=account_id,
            account_type=kind,
            authorized_as=authorized_as,
            credential=credential,
            affected=affected,
        )

    async def _authorize(self, caller: CallerIdentity, school_id: str) -> UserRole:
        """Return the admin role that grants access to the school.

        School admins must be acting for the school; district admins must
        administer the district the school belongs to.
        """
        admin = await self.identity.get_user(caller.uid)
        if admin is not None:
            if admin.role == UserRole.SCHOOL and admin.active_school_id == school_id:
                return UserRole.SCHOOL
            if (
                admin.role == UserRole.DISTRICT
                and admin.district_id
                and await self.identity.district_administers_school(admin.district_id, school_id)
            ):
                return UserRole.DISTRICT

        logger.info(
            f"Managed account deletion denied for {caller.uid} on school {school_id}",
            extra={"caller": caller.uid, "school_id": school_id},
        )
        raise PermissionDeniedError("Not authorized to manage accounts for this school")

    async def _find_target(
        self, kind: ManagedAccountType, account_id: str
    ) -> ManagedTarget | None:
        """Locate the account and the school it sits under."""
        match kind:
            case ManagedAccountType.STUDENT:
                stmt = select(Student.school_id, Student.user_id).where(Student.id == account_id)
            case ManagedAccountType.TEACHER:
                stmt = select(Teacher.school_id, Teacher.user_id).where(Teacher.id == account_id)
            case ManagedAccountType.STAFF:
                stmt = select(User.active_school_id, User.id).where(User.id == account_id)
            case _:
                assert_never(kind)

        row = (await self.session.execute(stmt)).first()
        if row is None:
            return None
        return ManagedTarget(school_id=row[0], user_id=row[1])
