"""
Ann Investment Portal - User Repository
"""
from typing import Optional
from sqlalchemy import update, not_
from sqlalchemy.ext.asyncio import AsyncSession

from .base import BaseRepository
from models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User model operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def delete(self, id: int) -> bool:
        """Delete a user together with its ledger entries"""
        user = await self.get_by_id(id)
        if user is None:
            return False
        await self.session.delete(user)
        await self.session.flush()
        return True

    async def toggle_frozen(self, user_id: int) -> Optional[User]:
        """Flip the frozen flag in a single statement"""
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(frozen=not_(User.frozen))
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        if result.rowcount == 0:
            return None
        return await self.get_by_id(user_id)

    async def mark_verified(self, user_id: int) -> Optional[User]:
        """Set verified=True"""
        return await self.update(user_id, verified=True)
