"""
Identity & Role Store

Read-only access to user records and district/school relationships used for
authorization decisions.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ezteach.core.models import School, User


class IdentityStore:
    """Reads identity records through a request-scoped session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: str) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def district_administers_school(self, district_id: str, school_id: str) -> bool:
        """Check that a school belongs to the given district."""
        result = await self.session.execute(
            select(School.id).where(School.id == school_id, School.district_id == district_id)
        )
        return result.scalar_one_or_none() is not None
