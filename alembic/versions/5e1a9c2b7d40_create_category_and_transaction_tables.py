"""Create category and transaction tables.

Revision ID: 5e1a9c2b7d40
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5e1a9c2b7d40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_by", sa.String(length=50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified_by", sa.String(length=50), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "category",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_category_created_by", "category", ["created_by"], unique=False)

    # Deleting a category keeps its transactions; they just lose the reference.
    op.create_table(
        "transaction",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("amount", sa.Numeric(precision=21, scale=2), nullable=False),
        sa.Column("details", sa.String(length=255), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["category_id"], ["category.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_transaction_created_by", "transaction", ["created_by"], unique=False)
    op.create_index("ix_transaction_category_id", "transaction", ["category_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_transaction_category_id", table_name="transaction")
    op.drop_index("ix_transaction_created_by", table_name="transaction")
    op.drop_table("transaction")
    op.drop_index("ix_category_created_by", table_name="category")
    op.drop_table("category")
