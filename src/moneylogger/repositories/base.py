"""Base repository with generic CRUD operations."""
from typing import Generic, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from moneylogger.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Generic repository providing CRUD operations for any model.

    Writes are flushed, not committed: the calling service owns the
    transaction boundary.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: int) -> T | None:
        """Get a single record by ID."""
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def exists_by_id(self, id: int) -> bool:
        """Check whether a record with this ID exists."""
        result = await self.db.execute(select(self.model.id).where(self.model.id == id))
        return result.scalar_one_or_none() is not None

    async def find_all(self, stmt: Select) -> list[T]:
        """Run a select built over this model and return the entities."""
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count(self, stmt: Select) -> int:
        """Count the rows a select would return, ignoring its ordering and paging."""
        subquery = stmt.order_by(None).limit(None).offset(None).subquery()
        result = await self.db.execute(select(func.count()).select_from(subquery))
        return result.scalar_one()

    async def add(self, obj: T) -> T:
        """Stage a new or modified record and flush it to obtain its ID."""
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def delete(self, obj: T) -> None:
        """Delete a record."""
        await self.db.delete(obj)
        await self.db.flush()
