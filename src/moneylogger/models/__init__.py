"""Database models."""
from moneylogger.models.category import Category
from moneylogger.models.transaction import Transaction

__all__ = ["Category", "Transaction"]
