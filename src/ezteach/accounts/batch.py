"""
Atomic write batches.

Deletion cascades are collected as statements first and committed in a single
transaction, so a failure at any point leaves every record in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.dml import Delete, Update

from ezteach.core.errors import InternalError

logger = logging.getLogger(__name__)


@dataclass
class WriteBatch:
    """Ordered group of write statements committed together."""

    statements: list[tuple[str, Delete | Update]] = field(default_factory=list)

    def delete(self, label: str, statement: Delete) -> None:
        """Mark records for deletion."""
        self.statements.append((label, statement))

    def update(self, label: str, statement: Update) -> None:
        """Queue an update (e.g. a relative counter change)."""
        self.statements.append((label, statement))

    def __len__(self) -> int:
        return len(self.statements)

    async def commit(self, session: AsyncSession) -> dict[str, int]:
        """Execute every statement and commit as one transaction.

        Args:
            session: Session whose transaction the batch joins

        Returns:
            Affected row count per statement label

        Raises:
            InternalError: If any statement or the commit fails; the
                transaction is rolled back first
        """
        affected: dict[str, int] = {}
        try:
            for label, statement in self.statements:
                result = await session.execute(statement)
                rowcount = result.rowcount  # type: ignore[attr-defined]
                affected[label] = affected.get(label, 0) + max(rowcount, 0)
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Write batch failed, rolled back {len(self)} statements", exc_info=True)
            raise InternalError() from e

        return affected
