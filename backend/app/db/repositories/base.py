"""
Ann Investment Portal - Base Repository
Common CRUD operations for account tables
"""
from typing import TypeVar, Generic, Type, Optional, List, Any
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func

from core.exceptions import EmailAlreadyRegisteredError
from db.base import Base

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository implementing common CRUD operations.
    Inherit from this class for specific model repositories.

    Email uniqueness is left to the table's unique constraint; a
    violation on flush surfaces as EmailAlreadyRegisteredError.

    Usage:
        class AdminRepository(BaseRepository[Admin]):
            def __init__(self, session: AsyncSession):
                super().__init__(Admin, session)
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    def _by_id(self, id: int):
        return select(self.model).where(self.model.id == id)

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """Get single record by ID (always re-read from the database)"""
        result = await self.session.execute(
            self._by_id(id).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[ModelType]:
        """Get record by email address"""
        result = await self.session.execute(
            select(self.model).where(self.model.email == email)
        )
        return result.scalar_one_or_none()

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: Optional[Any] = None
    ) -> List[ModelType]:
        """Get all records with pagination, newest first by default"""
        query = select(self.model)

        if order_by is not None:
            query = query.order_by(order_by)
        else:
            query = query.order_by(self.model.created_at.desc(), self.model.id.desc())

        query = query.offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count total records"""
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar() or 0

    async def create(self, **kwargs) -> ModelType:
        """Create new record"""
        instance = self.model(**kwargs)
        self.session.add(instance)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise EmailAlreadyRegisteredError(kwargs.get("email"))
        return await self.get_by_id(instance.id)

    async def update(self, id: int, **kwargs) -> Optional[ModelType]:
        """Update record by ID"""
        # Remove None values
        update_data = {k: v for k, v in kwargs.items() if v is not None}

        if not update_data:
            return await self.get_by_id(id)

        try:
            result = await self.session.execute(
                update(self.model)
                .where(self.model.id == id)
                .values(**update_data)
                .execution_options(synchronize_session=False)
            )
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise EmailAlreadyRegisteredError(update_data.get("email"))

        if result.rowcount == 0:
            return None
        return await self.get_by_id(id)

