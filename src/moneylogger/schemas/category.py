"""Category request/response schemas and list criteria."""

from pydantic import BaseModel, ConfigDict, Field

from moneylogger.core.criteria import Criteria, IntegerFilter, StringFilter


class CategoryDTO(BaseModel):
    """Category payload for create/replace and for responses."""

    id: int | None = Field(None, description="Server-assigned id; omit on create")
    name: str = Field(min_length=1, max_length=255, description="Category name")

    model_config = ConfigDict(from_attributes=True)


class CategoryPatchDTO(BaseModel):
    """Merge-patch payload: only supplied fields are applied."""

    id: int | None = None
    name: str | None = Field(None, min_length=1, max_length=255)


class CategoryCriteria(Criteria):
    """Filterable fields of the category list and count endpoints."""

    id: IntegerFilter | None = None
    name: StringFilter | None = None
    transaction_id: IntegerFilter | None = Field(None, alias="transactionId")
