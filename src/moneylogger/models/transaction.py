"""Transaction model representing a single recorded expense or income."""
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moneylogger.models.base import BaseModel
from moneylogger.models.category import Category


class Transaction(BaseModel):
    """Transaction model with an optional category."""

    __tablename__ = "transaction"

    amount: Mapped[Decimal] = mapped_column(Numeric(21, 2), nullable=False)
    details: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("category.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Relationships
    category: Mapped[Category | None] = relationship(Category, lazy="selectin")

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, amount={self.amount}, details={self.details})>"
