"""
Unit Tests for Enumerations and Service Errors
"""

import pytest

from ezteach.core.enums import (
    ManagedAccountType,
    TimeWindow,
    UserRole,
    parse_account_type,
    parse_time_window,
)
from ezteach.core.errors import (
    InternalError,
    InvalidArgumentError,
    PermissionDeniedError,
    ServiceError,
    UnauthenticatedError,
)


def test_user_roles():
    assert {r.value for r in UserRole} == {
        "student",
        "teacher",
        "sub",
        "parent",
        "school",
        "district",
    }


class TestParseAccountType:
    @pytest.mark.parametrize("value", ["student", "teacher", "staff"])
    def test_known(self, value):
        assert parse_account_type(value) == ManagedAccountType(value)

    def test_enum_passes_through(self):
        assert parse_account_type(ManagedAccountType.STAFF) is ManagedAccountType.STAFF

    @pytest.mark.parametrize("value", ["parent", "Student", ""])
    def test_unknown_rejected(self, value):
        with pytest.raises(InvalidArgumentError, match="Unknown account type"):
            parse_account_type(value)


class TestParseTimeWindow:
    def test_known(self):
        assert parse_time_window("current_week") is TimeWindow.CURRENT_WEEK

    def test_unknown_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Unknown time window"):
            parse_time_window("yesterday")


class TestServiceErrors:
    @pytest.mark.parametrize(
        ("error", "code", "status_code"),
        [
            (UnauthenticatedError(), "unauthenticated", 401),
            (InvalidArgumentError("bad"), "invalid-argument", 400),
            (PermissionDeniedError("no"), "permission-denied", 403),
            (InternalError(), "internal", 500),
        ],
    )
    def test_codes(self, error, code, status_code):
        assert isinstance(error, ServiceError)
        assert error.code == code
        assert error.status_code == status_code

    def test_default_details(self):
        assert UnauthenticatedError().detail == "Must be logged in"
        assert InternalError().detail == "Internal error"
