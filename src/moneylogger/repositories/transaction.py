"""Transaction repository with category detaching and aggregation queries."""
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from moneylogger.models.transaction import Transaction
from moneylogger.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_by_category(self, category_id: int) -> list[Transaction]:
        """Get all transactions referencing a category, whoever created them."""
        result = await self.db.execute(
            select(Transaction)
            .where(Transaction.category_id == category_id)
            .order_by(Transaction.id)
        )
        return list(result.scalars().all())

    async def detach_category(self, category_id: int) -> int:
        """Clear the category reference on every transaction that has it.

        Returns the number of transactions detached.
        """
        transactions = await self.get_by_category(category_id)
        for transaction in transactions:
            transaction.category = None
        await self.db.flush()
        return len(transactions)

    async def get_total_amount_by_creator(self, login: str) -> Decimal:
        """Sum the amounts of all transactions created by a login (0 if none)."""
        result = await self.db.execute(
            select(func.sum(Transaction.amount)).where(Transaction.created_by == login)
        )
        total = result.scalar_one_or_none()
        return Decimal(total) if total is not None else Decimal("0")
