"""Transaction service for ownership-checked CRUD operations and totals."""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from moneylogger.core.context import RequestContext
from moneylogger.models.category import Category
from moneylogger.models.transaction import Transaction
from moneylogger.repositories.category import CategoryRepository
from moneylogger.repositories.transaction import TransactionRepository
from moneylogger.schemas.transaction import (
    CategoryRefDTO,
    TransactionDTO,
    TransactionPatchDTO,
)
from moneylogger.services.ownership import (
    TRANSACTION,
    ensure_category_reference,
    ensure_owned,
)

logger = logging.getLogger(__name__)


class TransactionService:
    """Service layer for transaction-related operations.

    Writes follow the same order on every path:
    1. Check the nested category reference (invalid → 400)
    2. Check the caller owns the transaction being updated (→ 404/403)
    3. Create the nested category if it has no id
    4. Apply fields, flush, commit

    Nothing is written before both checks pass, and any failure rolls the
    whole call back.
    """

    def __init__(self, db: AsyncSession):
        """Initialize the service.

        Args:
            db: Database session for persistence
        """
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.category_repo = CategoryRepository(db)

    async def exists(self, transaction_id: int) -> bool:
        return await self.transaction_repo.exists_by_id(transaction_id)

    async def save(self, dto: TransactionDTO, ctx: RequestContext) -> TransactionDTO:
        """Create a transaction, or fully replace one the caller owns.

        A nested category with an id is attached after checking the caller
        owns it; one without an id is created for the caller first. No nested
        category clears the transaction's category.

        Raises:
            InvalidReferenceError: If the nested category is missing or foreign
            NotFoundError: If ``dto.id`` does not exist
            ForbiddenError: If ``dto.id`` belongs to another user
        """
        logger.debug(
            "Request to save Transaction", extra={"transaction_id": dto.id, "login": ctx.login}
        )
        try:
            category = await self._check_category_reference(dto.category, ctx)
            if dto.id is not None:
                transaction = await self._get_owned(dto.id, ctx)
            else:
                transaction = Transaction(created_by=ctx.login)

            if dto.category is not None and category is None:
                category = await self._create_category(dto.category, ctx)

            transaction.amount = dto.amount
            transaction.details = dto.details
            transaction.category = category
            transaction.last_modified_by = ctx.login
            await self.transaction_repo.add(transaction)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return TransactionDTO.model_validate(transaction)

    async def partial_update(
        self, dto: TransactionPatchDTO, ctx: RequestContext
    ) -> TransactionDTO:
        """Merge the non-null fields of ``dto`` into the caller's transaction.

        Raises:
            InvalidReferenceError: If the nested category is missing or foreign
            NotFoundError: If the transaction does not exist (anymore)
            ForbiddenError: If it belongs to another user
        """
        logger.debug(
            "Request to partially update Transaction",
            extra={"transaction_id": dto.id, "login": ctx.login},
        )
        try:
            category = await self._check_category_reference(dto.category, ctx)
            transaction = await self._get_owned(dto.id, ctx)

            if dto.category is not None and category is None:
                category = await self._create_category(dto.category, ctx)

            if dto.amount is not None:
                transaction.amount = dto.amount
            if dto.details is not None:
                transaction.details = dto.details
            if category is not None:
                transaction.category = category
            transaction.last_modified_by = ctx.login
            await self.transaction_repo.add(transaction)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return TransactionDTO.model_validate(transaction)

    async def find_one(self, transaction_id: int, ctx: RequestContext) -> TransactionDTO:
        logger.debug(
            "Request to get Transaction", extra={"transaction_id": transaction_id, "login": ctx.login}
        )
        transaction = await self._get_owned(transaction_id, ctx)
        return TransactionDTO.model_validate(transaction)

    async def delete(self, transaction_id: int, ctx: RequestContext) -> None:
        """Delete the caller's transaction. Its category is left untouched."""
        logger.debug(
            "Request to delete Transaction",
            extra={"transaction_id": transaction_id, "login": ctx.login},
        )
        try:
            transaction = await self._get_owned(transaction_id, ctx)
            await self.transaction_repo.delete(transaction)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def get_total_amount(self, ctx: RequestContext) -> Decimal:
        """Sum of all the caller's transaction amounts; 0 when there are none."""
        logger.debug("Request to get total amount of Transactions", extra={"login": ctx.login})
        return await self.transaction_repo.get_total_amount_by_creator(ctx.login)

    async def _get_owned(self, transaction_id: int | None, ctx: RequestContext) -> Transaction:
        transaction = (
            await self.transaction_repo.get_by_id(transaction_id)
            if transaction_id is not None
            else None
        )
        return ensure_owned(transaction, ctx, TRANSACTION, transaction_id)

    async def _check_category_reference(
        self, ref: CategoryRefDTO | None, ctx: RequestContext
    ) -> Category | None:
        """Resolve a nested category that points at an existing row."""
        if ref is None or ref.id is None:
            return None
        category = await self.category_repo.get_by_id(ref.id)
        return ensure_category_reference(category, ctx, ref.id)

    async def _create_category(self, ref: CategoryRefDTO, ctx: RequestContext) -> Category:
        category = Category(name=ref.name, created_by=ctx.login, last_modified_by=ctx.login)
        await self.category_repo.add(category)
        logger.info(
            "Category created with transaction",
            extra={"category_id": category.id, "login": ctx.login},
        )
        return category
