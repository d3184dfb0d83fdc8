"""Category repository."""
from sqlalchemy.ext.asyncio import AsyncSession

from moneylogger.models.category import Category
from moneylogger.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)
