"""
Integration Tests for School/District Managed Account Deletion
"""

import pytest
from sqlalchemy import Update, func, select
from sqlalchemy.exc import OperationalError

from conftest import caller
from ezteach.accounts import ManagedAccountDeletionOrchestrator
from ezteach.core.enums import ManagedAccountType, UserRole
from ezteach.core.errors import (
    InternalError,
    InvalidArgumentError,
    PermissionDeniedError,
    UnauthenticatedError,
)
from ezteach.core.models import District, School, Student, Teacher, User


async def count(session_factory, model, *criteria) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(model).where(*criteria))


async def student_count(session_factory, school_id: str = "school-1") -> int:
    async with session_factory() as session:
        return await session.scalar(select(School.student_count).where(School.id == school_id))


@pytest.fixture
async def roster(db_session, school):
    """Admins, students, a teacher and a staff member at school-1, plus school-2 accounts."""
    db_session.add_all(
        [
            District(id="district-2", name="Hillcrest County"),
            School(
                id="school-2", name="Hillcrest Middle", district_id="district-2", student_count=7
            ),
            # Admins
            User(id="admin-1", role=UserRole.SCHOOL, active_school_id="school-1"),
            User(id="admin-2", role=UserRole.SCHOOL, active_school_id="school-2"),
            User(id="district-admin-1", role=UserRole.DISTRICT, district_id="district-1"),
            User(id="district-admin-2", role=UserRole.DISTRICT, district_id="district-2"),
            # Students
            User(id="kid-1", role=UserRole.STUDENT),
            Student(id="stu-1", user_id="kid-1", school_id="school-1", first_name="Ana"),
            User(id="kid-2", role=UserRole.STUDENT),
            Student(id="stu-2", user_id="kid-2", school_id="school-1", first_name="Ben"),
            Student(id="stu-3", school_id="school-1", first_name="Cleo"),
            # Teacher and staff
            User(id="t1", role=UserRole.TEACHER),
            Teacher(id="teacher-1", user_id="t1", school_id="school-1"),
            User(id="staff-1", role=UserRole.SUB, active_school_id="school-1"),
            # Accounts at school-2
            User(id="kid-9", role=UserRole.STUDENT),
            Student(id="stu-9", user_id="kid-9", school_id="school-2", first_name="Dev"),
            User(id="t9", role=UserRole.TEACHER),
            Teacher(id="teacher-9", user_id="t9", school_id="school-2"),
        ]
    )
    await db_session.commit()


@pytest.fixture
def orchestrator(db_session, credential_store) -> ManagedAccountDeletionOrchestrator:
    return ManagedAccountDeletionOrchestrator(db_session, credentials=credential_store)


class TestStudentDeletion:
    async def test_school_admin_deletes_student(
        self, orchestrator, roster, session_factory, credential_store
    ):
        result = await orchestrator.delete_managed_account(
            caller("admin-1"), "stu-1", "student", "school-1"
        )

        assert result.deleted_id == "stu-1"
        assert result.account_type is ManagedAccountType.STUDENT
        assert result.authorized_as is UserRole.SCHOOL

        assert await count(session_factory, Student, Student.id == "stu-1") == 0
        assert await count(session_factory, User, User.id == "kid-1") == 0
        assert await student_count(session_factory) == 4

        # Credential removed last, for the student's login uid
        assert credential_store.attempts == ["kid-1"]
        assert result.credential.ok is True

    async def test_student_without_login(
        self, orchestrator, roster, session_factory, credential_store
    ):
        await orchestrator.delete_managed_account(
            caller("admin-1"), "stu-3", ManagedAccountType.STUDENT, "school-1"
        )

        assert await count(session_factory, Student, Student.id == "stu-3") == 0
        assert await student_count(session_factory) == 4
        assert credential_store.attempts == ["stu-3"]

    async def test_district_admin_deletes_student(self, orchestrator, roster, session_factory):
        result = await orchestrator.delete_managed_account(
            caller("district-admin-1"), "stu-1", "student", "school-1"
        )

        assert result.authorized_as is UserRole.DISTRICT
        assert await count(session_factory, Student, Student.id == "stu-1") == 0
        assert await student_count(session_factory) == 4

    async def test_concurrent_deletions_both_decrement(
        self, db_session, roster, session_factory, credential_store
    ):
        """Two admins working from the same stale count lose no decrement."""
        stale = await db_session.get(School, "school-1")
        assert stale.student_count == 5

        async with session_factory() as other_session:
            other = ManagedAccountDeletionOrchestrator(
                other_session, credentials=credential_store
            )
            await other.delete_managed_account(
                caller("district-admin-1"), "stu-2", "student", "school-1"
            )

        orchestrator = ManagedAccountDeletionOrchestrator(
            db_session, credentials=credential_store
        )
        await orchestrator.delete_managed_account(
            caller("admin-1"), "stu-1", "student", "school-1"
        )

        assert await student_count(session_factory) == 3

    async def test_failed_batch_keeps_student(
        self, orchestrator, db_session, roster, session_factory, credential_store, monkeypatch
    ):
        real_execute = db_session.execute

        async def failing_execute(statement, *args, **kwargs):
            if isinstance(statement, Update):
                raise OperationalError(str(statement), {}, Exception("database is locked"))
            return await real_execute(statement, *args, **kwargs)

        monkeypatch.setattr(db_session, "execute", failing_execute)

        with pytest.raises(InternalError):
            await orchestrator.delete_managed_account(
                caller("admin-1"), "stu-1", "student", "school-1"
            )

        assert await count(session_factory, Student, Student.id == "stu-1") == 1
        assert await count(session_factory, User, User.id == "kid-1") == 1
        assert await student_count(session_factory) == 5
        assert credential_store.attempts == []


class TestTeacherAndStaffDeletion:
    async def test_teacher_keeps_user_record(
        self, orchestrator, roster, session_factory, credential_store
    ):
        result = await orchestrator.delete_managed_account(
            caller("admin-1"), "teacher-1", "teacher", "school-1"
        )

        assert result.credential is None
        assert await count(session_factory, Teacher, Teacher.id == "teacher-1") == 0
        assert await count(session_factory, User, User.id == "t1") == 1
        assert await student_count(session_factory) == 5
        assert credential_store.attempts == []

    async def test_staff_user_record_removed(
        self, orchestrator, roster, session_factory, credential_store
    ):
        result = await orchestrator.delete_managed_account(
            caller("admin-1"), "staff-1", "staff", "school-1"
        )

        assert result.credential is None
        assert await count(session_factory, User, User.id == "staff-1") == 0
        assert await student_count(session_factory) == 5
        assert credential_store.attempts == []


class TestAuthorization:
    @pytest.mark.parametrize(
        "admin_id",
        [
            "admin-2",  # school admin of another school
            "district-admin-2",  # district admin of another district
            "t1",  # not an admin
            "nobody",  # no user record
        ],
    )
    async def test_denied_touches_nothing(
        self, orchestrator, roster, session_factory, credential_store, admin_id
    ):
        with pytest.raises(PermissionDeniedError):
            await orchestrator.delete_managed_account(
                caller(admin_id), "stu-1", "student", "school-1"
            )

        assert await count(session_factory, Student, Student.id == "stu-1") == 1
        assert await count(session_factory, User, User.id == "kid-1") == 1
        assert await student_count(session_factory) == 5
        assert credential_store.attempts == []

    async def test_school_admin_scope_is_active_school(self, orchestrator, roster):
        """A school admin cannot act for a school merely by naming it."""
        with pytest.raises(PermissionDeniedError):
            await orchestrator.delete_managed_account(
                caller("admin-1"), "stu-1", "student", "school-2"
            )

    async def test_requires_caller(self, orchestrator, roster, session_factory):
        with pytest.raises(UnauthenticatedError):
            await orchestrator.delete_managed_account(None, "stu-1", "student", "school-1")

        assert await count(session_factory, Student, Student.id == "stu-1") == 1


class TestArguments:
    async def test_unknown_account_type(self, orchestrator, roster):
        with pytest.raises(InvalidArgumentError, match="Unknown account type"):
            await orchestrator.delete_managed_account(
                caller("admin-1"), "stu-1", "parent", "school-1"
            )

    @pytest.mark.parametrize(("account_id", "school_id"), [("", "school-1"), ("stu-1", "  ")])
    async def test_missing_ids(self, orchestrator, roster, account_id, school_id):
        with pytest.raises(InvalidArgumentError, match="required"):
            await orchestrator.delete_managed_account(
                caller("admin-1"), account_id, "student", school_id
            )


class TestTargetScope:
    """Accounts are only deleted from under the school the admin acts for."""

    @pytest.mark.parametrize(
        ("account_id", "account_type", "model"),
        [
            ("stu-9", "student", Student),
            ("teacher-9", "teacher", Teacher),
            ("admin-2", "staff", User),
        ],
    )
    async def test_account_at_other_school_denied(
        self,
        orchestrator,
        roster,
        session_factory,
        credential_store,
        account_id,
        account_type,
        model,
    ):
        with pytest.raises(PermissionDeniedError, match="does not belong"):
            await orchestrator.delete_managed_account(
                caller("admin-1"), account_id, account_type, "school-1"
            )

        assert await count(session_factory, model, model.id == account_id) == 1
        assert await student_count(session_factory, "school-1") == 5
        assert await student_count(session_factory, "school-2") == 7
        assert credential_store.attempts == []

    async def test_district_admin_limited_to_named_school(
        self, orchestrator, roster, session_factory
    ):
        with pytest.raises(PermissionDeniedError):
            await orchestrator.delete_managed_account(
                caller("district-admin-1"), "stu-9", "student", "school-1"
            )

        assert await count(session_factory, User, User.id == "kid-9") == 1

    async def test_district_admin_of_account_school_allowed(
        self, orchestrator, roster, session_factory
    ):
        await orchestrator.delete_managed_account(
            caller("district-admin-2"), "stu-9", "student", "school-2"
        )

        assert await count(session_factory, Student, Student.id == "stu-9") == 0
        assert await student_count(session_factory, "school-2") == 6
        assert await student_count(session_factory, "school-1") == 5


class TestRepeatedDeletion:
    async def test_second_student_deletion_is_a_noop(
        self, orchestrator, roster, session_factory, credential_store
    ):
        await orchestrator.delete_managed_account(
            caller("admin-1"), "stu-1", "student", "school-1"
        )
        result = await orchestrator.delete_managed_account(
            caller("admin-1"), "stu-1", "student", "school-1"
        )

        assert result.deleted_id == "stu-1"
        assert result.credential is None
        assert result.affected == {}
        assert await student_count(session_factory) == 4
        assert credential_store.attempts == ["kid-1"]

    async def test_unknown_student_changes_nothing(
        self, orchestrator, roster, session_factory, credential_store
    ):
        await orchestrator.delete_managed_account(
            caller("admin-1"), "ghost", "student", "school-1"
        )

        assert await student_count(session_factory) == 5
        assert credential_store.attempts == []

    async def test_unknown_account_still_requires_authorization(self, orchestrator, roster):
        with pytest.raises(PermissionDeniedError):
            await orchestrator.delete_managed_account(
                caller("admin-2"), "ghost", "student", "school-1"
            )
