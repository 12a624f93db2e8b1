"""Caller identity and credential store access."""

from .caller import CallerIdentity, decode_bearer_token
from .credentials import CredentialDeletionResult, CredentialStore, CredentialStoreClient

__all__ = [
    "CallerIdentity",
    "decode_bearer_token",
    "CredentialDeletionResult",
    "CredentialStore",
    "CredentialStoreClient",
]
