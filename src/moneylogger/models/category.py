"""Category model used to group a user's transactions."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from moneylogger.models.base import BaseModel


class Category(BaseModel):
    """Category model.

    There is no back-collection of transactions; transactions in a category
    are found by querying ``Transaction.category_id``.
    """

    __tablename__ = "category"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"
