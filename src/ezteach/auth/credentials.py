"""
Credential Store Client

Deletes login credentials through the identity provider's admin API.
Deletion is a best-effort step: the client never raises, it reports the
outcome as a CredentialDeletionResult and the caller decides what to do with it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from ezteach.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CredentialDeletionResult:
    """Outcome of a credential deletion attempt."""

    uid: str
    deleted: bool
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.deleted


class CredentialStore(Protocol):
    """Anything that can delete a login credential by uid."""

    async def delete_credential(self, uid: str) -> CredentialDeletionResult: ...


class CredentialStoreClient:
    """Client for the identity provider admin API.

    Issues `DELETE {base_url}/users/{uid}`.
    """

    def __init__(self, *, base_url: str, api_token: str, timeout: float = 10.0):
        """Initialize credential store client.

        Args:
            base_url: Admin API base URL
            api_token: Admin bearer token
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> CredentialStoreClient:
        """Create client from application settings."""
        return cls(
            base_url=settings.AUTH_ADMIN_URL,
            api_token=settings.AUTH_ADMIN_TOKEN,
            timeout=settings.AUTH_ADMIN_TIMEOUT_SECONDS,
        )

    async def delete_credential(self, uid: str) -> CredentialDeletionResult:
        """Delete the credential for one user.

        Args:
            uid: Authentication uid

        Returns:
            CredentialDeletionResult; `deleted` is False on any failure,
            including a credential that no longer exists
        """
        headers = {"Authorization": f"Bearer {self.api_token}"}
        url = f"{self.base_url}/users/{uid}"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.delete(url, headers=headers, timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return CredentialDeletionResult(uid=uid, deleted=False, error=f"HTTP error: {e}")

        if response.status_code == 404:
            return CredentialDeletionResult(uid=uid, deleted=False, error="credential not found")

        if response.status_code not in (200, 202, 204):
            return CredentialDeletionResult(
                uid=uid,
                deleted=False,
                error=f"admin API returned {response.status_code}",
            )

        logger.info(f"Credential deleted: {uid}")
        return CredentialDeletionResult(uid=uid, deleted=True)
