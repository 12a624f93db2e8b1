"""
Service Errors

Typed failures raised by the account and leaderboard services. Each carries the
wire code the API returns so callers can tell the categories apart.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    code: str = "internal"
    status_code: int = 500

    def __init__(self, detail: str = "Internal error") -> None:
        super().__init__(detail)
        self.detail = detail


class UnauthenticatedError(ServiceError):
    """No caller identity was presented."""

    code = "unauthenticated"
    status_code = 401

    def __init__(self, detail: str = "Must be logged in") -> None:
        super().__init__(detail)


class InvalidArgumentError(ServiceError):
    """A required argument is missing or malformed."""

    code = "invalid-argument"
    status_code = 400


class PermissionDeniedError(ServiceError):
    """The caller lacks the role or scope needed for the target."""

    code = "permission-denied"
    status_code = 403


class InternalError(ServiceError):
    """Data store failure. Detail is always generic."""

    code = "internal"
    status_code = 500

    def __init__(self, detail: str = "Internal error") -> None:
        super().__init__(detail)
