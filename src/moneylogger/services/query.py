"""Criteria-based list and count queries.

Each query service turns its entity's criteria into a select whose first
condition is always "created by the caller", then ANDs one clause per
supplied filter operator. A list or count can therefore never see another
user's rows, whatever filters are passed.
"""

import logging

from sqlalchemy import Select, and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from moneylogger.core.context import RequestContext
from moneylogger.core.criteria import build_clauses
from moneylogger.core.pagination import Page, Pageable, apply_paging
from moneylogger.models.category import Category
from moneylogger.models.transaction import Transaction
from moneylogger.repositories.category import CategoryRepository
from moneylogger.repositories.transaction import TransactionRepository
from moneylogger.schemas.category import CategoryCriteria, CategoryDTO
from moneylogger.schemas.transaction import TransactionCriteria, TransactionDTO

logger = logging.getLogger(__name__)

TRANSACTION_SORT_COLUMNS = {
    "id": Transaction.id,
    "amount": Transaction.amount,
    "details": Transaction.details,
    "date": Transaction.created_at,
    "createdAt": Transaction.created_at,
}

CATEGORY_SORT_COLUMNS = {
    "id": Category.id,
    "name": Category.name,
}


class TransactionQueryService:
    """Filtered, owner-scoped queries over transactions."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.transaction_repo = TransactionRepository(db)

    async def find_by_criteria(
        self, criteria: TransactionCriteria | None, pageable: Pageable, ctx: RequestContext
    ) -> Page[TransactionDTO]:
        logger.debug(
            "Find Transactions by criteria",
            extra={"login": ctx.login, "page": pageable.page, "size": pageable.size},
        )
        stmt = self.create_specification(criteria, ctx)
        total = await self.transaction_repo.count(stmt)
        transactions = await self.transaction_repo.find_all(
            apply_paging(stmt, pageable, TRANSACTION_SORT_COLUMNS, Transaction.id)
        )
        return Page(
            content=[TransactionDTO.model_validate(t) for t in transactions],
            total=total,
            pageable=pageable,
        )

    async def count_by_criteria(
        self, criteria: TransactionCriteria | None, ctx: RequestContext
    ) -> int:
        logger.debug("Count Transactions by criteria", extra={"login": ctx.login})
        return await self.transaction_repo.count(self.create_specification(criteria, ctx))

    def create_specification(
        self, criteria: TransactionCriteria | None, ctx: RequestContext
    ) -> Select:
        stmt = select(Transaction)
        clauses = [Transaction.created_by == ctx.login]
        if criteria is not None:
            clauses += build_clauses(Transaction.id, criteria.id)
            clauses += build_clauses(Transaction.amount, criteria.amount)
            clauses += build_clauses(Transaction.details, criteria.details)
            clauses += build_clauses(Transaction.created_at, criteria.date)
            if criteria.category_id is not None:
                # Left join keeps uncategorised transactions visible to
                # categoryId.specified=false.
                stmt = stmt.outerjoin(Category, Transaction.category_id == Category.id)
                clauses += build_clauses(Category.id, criteria.category_id)
        return stmt.where(and_(*clauses))


class CategoryQueryService:
    """Filtered, owner-scoped queries over categories."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.category_repo = CategoryRepository(db)

    async def find_by_criteria(
        self, criteria: CategoryCriteria | None, pageable: Pageable, ctx: RequestContext
    ) -> Page[CategoryDTO]:
        logger.debug(
            "Find Categories by criteria",
            extra={"login": ctx.login, "page": pageable.page, "size": pageable.size},
        )
        stmt = self.create_specification(criteria, ctx)
        total = await self.category_repo.count(stmt)
        categories = await self.category_repo.find_all(
            apply_paging(stmt, pageable, CATEGORY_SORT_COLUMNS, Category.id)
        )
        return Page(
            content=[CategoryDTO.model_validate(c) for c in categories],
            total=total,
            pageable=pageable,
        )

    async def count_by_criteria(
        self, criteria: CategoryCriteria | None, ctx: RequestContext
    ) -> int:
        logger.debug("Count Categories by criteria", extra={"login": ctx.login})
        return await self.category_repo.count(self.create_specification(criteria, ctx))

    def create_specification(
        self, criteria: CategoryCriteria | None, ctx: RequestContext
    ) -> Select:
        stmt = select(Category)
        clauses = [Category.created_by == ctx.login]
        if criteria is not None:
            clauses += build_clauses(Category.id, criteria.id)
            clauses += build_clauses(Category.name, criteria.name)
            if criteria.transaction_id is not None:
                # One category can match several transactions; DISTINCT keeps
                # each category once.
                stmt = stmt.outerjoin(
                    Transaction, Transaction.category_id == Category.id
                ).distinct()
                clauses += build_clauses(Transaction.id, criteria.transaction_id)
        return stmt.where(and_(*clauses))
