"""Unit tests for TransactionService unit-of-work handling."""

from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from moneylogger.core.context import RequestContext
from moneylogger.core.exceptions import ForbiddenError, InvalidReferenceError
from moneylogger.models.category import Category
from moneylogger.models.transaction import Transaction
from moneylogger.schemas.transaction import TransactionDTO, TransactionPatchDTO
from moneylogger.services.transaction import TransactionService


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock(spec=AsyncSession)
    db.add = Mock()
    db.delete = AsyncMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


@pytest.fixture
def ctx():
    return RequestContext(login="alice")


@pytest.fixture
def service(mock_db):
    service = TransactionService(mock_db)
    service.transaction_repo = AsyncMock()
    service.category_repo = AsyncMock()
    return service


class TestSave:
    """Test create/replace."""

    async def test_create_commits_once(self, service, mock_db, ctx):
        async def assign_id(obj):
            obj.id = 11
            return obj

        service.transaction_repo.add.side_effect = assign_id

        result = await service.save(TransactionDTO(amount="7.25", details="Taxi"), ctx)

        assert result.id == 11
        assert result.amount == Decimal("7.25")
        created = service.transaction_repo.add.call_args.args[0]
        assert created.created_by == "alice"
        assert created.last_modified_by == "alice"
        mock_db.commit.assert_awaited_once()
        mock_db.rollback.assert_not_awaited()

    async def test_foreign_category_rolls_back_before_any_write(self, service, mock_db, ctx):
        service.category_repo.get_by_id.return_value = Category(
            id=2, name="Bob's", created_by="bob"
        )
        dto = TransactionDTO(amount="1.00", details="Coffee", category={"id": 2})

        with pytest.raises(InvalidReferenceError):
            await service.save(dto, ctx)

        service.transaction_repo.add.assert_not_awaited()
        service.category_repo.add.assert_not_awaited()
        mock_db.commit.assert_not_awaited()
        mock_db.rollback.assert_awaited_once()

    async def test_new_category_not_created_for_foreign_transaction(self, service, mock_db, ctx):
        service.transaction_repo.get_by_id.return_value = Transaction(
            id=4, amount=Decimal("1.00"), details="Bob's", created_by="bob"
        )
        dto = TransactionDTO(id=4, amount="1.00", details="Mine now", category={"name": "Stolen"})

        with pytest.raises(ForbiddenError):
            await service.save(dto, ctx)

        service.category_repo.add.assert_not_awaited()
        mock_db.rollback.assert_awaited_once()

    async def test_flush_failure_rolls_back(self, service, mock_db, ctx):
        service.transaction_repo.add.side_effect = RuntimeError("flush failed")

        with pytest.raises(RuntimeError):
            await service.save(TransactionDTO(amount="1.00", details="Coffee"), ctx)

        mock_db.commit.assert_not_awaited()
        mock_db.rollback.assert_awaited_once()


class TestPartialUpdate:
    """Test merge-patch semantics."""

    async def test_only_supplied_fields_change(self, service, mock_db, ctx):
        category = Category(id=3, name="Food", created_by="alice")
        transaction = Transaction(
            id=8, amount=Decimal("12.00"), details="Lunch", category=category, created_by="alice"
        )
        service.transaction_repo.get_by_id.return_value = transaction

        result = await service.partial_update(TransactionPatchDTO(id=8, details="Dinner"), ctx)

        assert result.details == "Dinner"
        assert result.amount == Decimal("12.00")
        assert result.category.id == 3
        mock_db.commit.assert_awaited_once()
