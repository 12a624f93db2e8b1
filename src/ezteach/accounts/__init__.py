"""Account lifecycle: self-service and admin-managed deletion."""

from .batch import WriteBatch
from .deletion import AccountDeletionOrchestrator, AccountDeletionResult
from .identity_store import IdentityStore
from .managed import ManagedAccountDeletionOrchestrator, ManagedAccountDeletionResult

__all__ = [
    "WriteBatch",
    "IdentityStore",
    "AccountDeletionOrchestrator",
    "AccountDeletionResult",
    "ManagedAccountDeletionOrchestrator",
    "ManagedAccountDeletionResult",
]
