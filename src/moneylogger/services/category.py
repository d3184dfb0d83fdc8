"""Category service for ownership-checked CRUD operations."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from moneylogger.core.context import RequestContext
from moneylogger.models.category import Category
from moneylogger.repositories.category import CategoryRepository
from moneylogger.repositories.transaction import TransactionRepository
from moneylogger.schemas.category import CategoryDTO, CategoryPatchDTO
from moneylogger.services.ownership import CATEGORY, ensure_owned

logger = logging.getLogger(__name__)


class CategoryService:
    """Service layer for category-related operations.

    Every public method runs as one database transaction: it commits on
    success and rolls back if anything raises.
    """

    def __init__(self, db: AsyncSession):
        """Initialize category service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.category_repo = CategoryRepository(db)
        self.transaction_repo = TransactionRepository(db)

    async def exists(self, category_id: int) -> bool:
        return await self.category_repo.exists_by_id(category_id)

    async def save(self, dto: CategoryDTO, ctx: RequestContext) -> CategoryDTO:
        """Create a category, or replace one the caller owns when ``dto.id`` is set.

        Raises:
            NotFoundError: If ``dto.id`` does not exist
            ForbiddenError: If ``dto.id`` belongs to another user
        """
        logger.debug("Request to save Category", extra={"category_id": dto.id, "login": ctx.login})
        try:
            if dto.id is not None:
                category = await self._get_owned(dto.id, ctx)
            else:
                category = Category(created_by=ctx.login)

            category.name = dto.name
            category.last_modified_by = ctx.login
            await self.category_repo.add(category)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return CategoryDTO.model_validate(category)

    async def partial_update(self, dto: CategoryPatchDTO, ctx: RequestContext) -> CategoryDTO:
        """Apply the non-null fields of ``dto`` to the caller's category.

        Raises:
            NotFoundError: If the category does not exist (anymore)
            ForbiddenError: If it belongs to another user
        """
        logger.debug(
            "Request to partially update Category", extra={"category_id": dto.id, "login": ctx.login}
        )
        try:
            category = await self._get_owned(dto.id, ctx)
            if dto.name is not None:
                category.name = dto.name
            category.last_modified_by = ctx.login
            await self.category_repo.add(category)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return CategoryDTO.model_validate(category)

    async def find_one(self, category_id: int, ctx: RequestContext) -> CategoryDTO:
        logger.debug("Request to get Category", extra={"category_id": category_id, "login": ctx.login})
        category = await self._get_owned(category_id, ctx)
        return CategoryDTO.model_validate(category)

    async def delete(self, category_id: int, ctx: RequestContext) -> None:
        """Delete the caller's category.

        Transactions in the category are kept; they just lose their category.
        """
        logger.debug("Request to delete Category", extra={"category_id": category_id, "login": ctx.login})
        try:
            category = await self._get_owned(category_id, ctx)
            detached = await self.transaction_repo.detach_category(category.id)
            await self.category_repo.delete(category)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Category deleted",
            extra={"category_id": category_id, "detached_transactions": detached},
        )

    async def _get_owned(self, category_id: int | None, ctx: RequestContext) -> Category:
        category = await self.category_repo.get_by_id(category_id) if category_id is not None else None
        return ensure_owned(category, ctx, CATEGORY, category_id)
