"""Transaction request/response schemas and list criteria."""

from decimal import Decimal
from typing import Annotated

from fastapi.encoders import decimal_encoder
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, model_validator

from moneylogger.core.criteria import (
    Criteria,
    DateTimeFilter,
    DecimalFilter,
    IntegerFilter,
    StringFilter,
)

# Money goes over the wire as a JSON number, not a string.
JsonDecimal = Annotated[
    Decimal, PlainSerializer(decimal_encoder, return_type=int | float, when_used="json")
]


class CategoryRefDTO(BaseModel):
    """Shallow category (id and name only) nested in a transaction.

    With an id it references an existing category of the caller. Without an
    id it describes a new category to create together with the transaction.
    """

    id: int | None = None
    name: str | None = Field(None, min_length=1, max_length=255)

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def check_name_for_new_category(self) -> "CategoryRefDTO":
        if self.id is None and self.name is None:
            raise ValueError("a new category needs a name")
        return self


class TransactionDTO(BaseModel):
    """Transaction payload for create/replace and for responses."""

    id: int | None = Field(None, description="Server-assigned id; omit on create")
    amount: JsonDecimal = Field(
        max_digits=21, decimal_places=2, description="Signed amount, at most 2 decimals"
    )
    details: str = Field(min_length=1, max_length=255, description="What the money was for")
    category: CategoryRefDTO | None = None

    model_config = ConfigDict(from_attributes=True)


class TransactionPatchDTO(BaseModel):
    """Merge-patch payload: only supplied (non-null) fields are applied."""

    id: int | None = None
    amount: JsonDecimal | None = Field(None, max_digits=21, decimal_places=2)
    details: str | None = Field(None, min_length=1, max_length=255)
    category: CategoryRefDTO | None = None


class TransactionCriteria(Criteria):
    """Filterable fields of the transaction list and count endpoints.

    ``date`` applies to the creation timestamp; ``categoryId`` applies to the
    id of the (left-joined) category.
    """

    id: IntegerFilter | None = None
    amount: DecimalFilter | None = None
    details: StringFilter | None = None
    date: DateTimeFilter | None = None
    category_id: IntegerFilter | None = Field(None, alias="categoryId")
