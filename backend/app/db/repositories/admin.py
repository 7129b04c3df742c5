"""
Ann Investment Portal - Admin Repository
"""
from sqlalchemy.ext.asyncio import AsyncSession

from .base import BaseRepository
from models.admin import Admin


class AdminRepository(BaseRepository[Admin]):
    """Repository for Admin model operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Admin, session)

    async def any_exists(self) -> bool:
        """True once at least one admin account has been created"""
        return await self.count() > 0
