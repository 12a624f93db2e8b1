"""
Closed enumerations shared by models, schemas and services.

Parsing helpers raise InvalidArgumentError for unknown values so that an
unrecognized role, account type or window never falls through silently.
"""

from __future__ import annotations

from enum import StrEnum

from ezteach.core.errors import InvalidArgumentError


class UserRole(StrEnum):
    """Account roles held in the identity store."""

    STUDENT = "student"
    TEACHER = "teacher"
    SUB = "sub"  # substitute / paraeducator
    PARENT = "parent"
    SCHOOL = "school"  # school admin
    DISTRICT = "district"  # district admin


class ManagedAccountType(StrEnum):
    """Account kinds a school or district admin may remove."""

    STUDENT = "student"
    TEACHER = "teacher"
    STAFF = "staff"


class TimeWindow(StrEnum):
    """Leaderboard aggregation windows."""

    ALL_TIME = "all_time"
    CURRENT_MONTH = "current_month"
    CURRENT_WEEK = "current_week"


def parse_account_type(value: ManagedAccountType | str) -> ManagedAccountType:
    """Coerce a raw value to ManagedAccountType."""
    try:
        return ManagedAccountType(value)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown account type: {value!r}") from e


def parse_time_window(value: TimeWindow | str) -> TimeWindow:
    """Coerce a raw value to TimeWindow."""
    try:
        return TimeWindow(value)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown time window: {value!r}") from e
