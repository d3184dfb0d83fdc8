"""Unit tests for ownership checks."""

import pytest

from moneylogger.core.context import RequestContext
from moneylogger.core.exceptions import ForbiddenError, InvalidReferenceError, NotFoundError
from moneylogger.models.category import Category
from moneylogger.models.transaction import Transaction
from moneylogger.services.ownership import (
    CATEGORY,
    TRANSACTION,
    ensure_category_reference,
    ensure_owned,
)

ALICE = RequestContext(login="alice", request_id="req-1")


class TestEnsureOwned:
    """Test single-entity access checks."""

    def test_returns_own_entity(self):
        transaction = Transaction(id=1, created_by="alice")

        assert ensure_owned(transaction, ALICE, TRANSACTION, 1) is transaction

    def test_missing_entity_is_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            ensure_owned(None, ALICE, TRANSACTION, 42)

        assert exc_info.value.error_code == "API_006"
        assert exc_info.value.http_status == 404
        assert exc_info.value.details["id"] == 42

    def test_foreign_entity_is_forbidden(self):
        category = Category(id=5, name="Rent", created_by="bob")

        with pytest.raises(ForbiddenError) as exc_info:
            ensure_owned(category, ALICE, CATEGORY, 5)

        assert exc_info.value.error_code == "API_007"
        assert exc_info.value.http_status == 403

    def test_login_comparison_is_exact(self):
        category = Category(id=5, name="Rent", created_by="Alice")

        with pytest.raises(ForbiddenError):
            ensure_owned(category, ALICE, CATEGORY, 5)


class TestEnsureCategoryReference:
    """Test validation of categories referenced from transaction payloads."""

    def test_own_category_accepted(self):
        category = Category(id=3, name="Food", created_by="alice")

        assert ensure_category_reference(category, ALICE, 3) is category

    def test_foreign_category_is_invalid_reference(self):
        category = Category(id=3, name="Food", created_by="bob")

        with pytest.raises(InvalidReferenceError) as exc_info:
            ensure_category_reference(category, ALICE, 3)

        assert exc_info.value.error_code == "API_009"
        assert exc_info.value.http_status == 400

    def test_missing_category_is_invalid_reference(self):
        with pytest.raises(InvalidReferenceError):
            ensure_category_reference(None, ALICE, 99)
