"""Filter criteria and their translation into SQL clauses.

List and count endpoints accept filters as ``field.operator=value`` query
parameters, e.g. ``/transactions?amount.greaterThan=10&details.contains=rent``.
Each entity declares a criteria model with a closed set of filterable fields,
each typed with one of the filters below. Every operator is a member of
FilterOp and maps to exactly one clause builder.
"""

from collections.abc import Callable, Iterable
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sqlalchemy import ColumnElement

from moneylogger.core.exceptions import BadRequestError

T = TypeVar("T")
C = TypeVar("C", bound="Criteria")


class FilterOp(str, Enum):
    """Operators accepted after the dot in a filter parameter."""

    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    IN = "in"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    SPECIFIED = "specified"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesNotContain"


_CLAUSE_BUILDERS: dict[FilterOp, Callable[[Any, Any], ColumnElement[bool]]] = {
    FilterOp.EQUALS: lambda column, value: column == value,
    FilterOp.NOT_EQUALS: lambda column, value: column != value,
    FilterOp.IN: lambda column, value: column.in_(value),
    FilterOp.GREATER_THAN: lambda column, value: column > value,
    FilterOp.GREATER_THAN_OR_EQUAL: lambda column, value: column >= value,
    FilterOp.LESS_THAN: lambda column, value: column < value,
    FilterOp.LESS_THAN_OR_EQUAL: lambda column, value: column <= value,
    FilterOp.SPECIFIED: lambda column, value: (
        column.is_not(None) if value else column.is_(None)
    ),
    FilterOp.CONTAINS: lambda column, value: column.contains(value, autoescape=True),
    FilterOp.DOES_NOT_CONTAIN: lambda column, value: ~column.contains(
        value, autoescape=True
    ),
}


class Filter(BaseModel, Generic[T]):
    """Equality and range operators over an orderable value."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    equals: T | None = None
    not_equals: T | None = Field(None, alias="notEquals")
    in_: list[T] | None = Field(None, alias="in")
    greater_than: T | None = Field(None, alias="greaterThan")
    greater_than_or_equal: T | None = Field(None, alias="greaterThanOrEqual")
    less_than: T | None = Field(None, alias="lessThan")
    less_than_or_equal: T | None = Field(None, alias="lessThanOrEqual")
    specified: bool | None = None

    def operations(self) -> list[tuple[FilterOp, Any]]:
        """Return the operators that were actually supplied, with their values."""
        ops = []
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if value is not None:
                ops.append((FilterOp(field.alias or name), value))
        return ops


class IntegerFilter(Filter[int]):
    pass


class DecimalFilter(Filter[Decimal]):
    pass


class DateTimeFilter(Filter[datetime]):
    pass


class StringFilter(Filter[str]):
    """Filter over text columns; adds substring matching."""

    contains: str | None = None
    does_not_contain: str | None = Field(None, alias="doesNotContain")


class Criteria(BaseModel):
    """Base class for per-entity criteria models."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)


def build_clauses(column: Any, filter_: Filter | None) -> list[ColumnElement[bool]]:
    """Translate one field's filter into clauses over ``column``.

    An absent filter contributes nothing; it never means "match null".
    """
    if filter_ is None:
        return []
    return [_CLAUSE_BUILDERS[op](column, value) for op, value in filter_.operations()]


def parse_criteria(params: Iterable[tuple[str, str]], criteria_cls: type[C]) -> C:
    """Build a criteria model from ``field.operator=value`` query parameters.

    Parameters without a dot (page, size, sort, ...) are not filters and are
    skipped. ``in`` values are comma separated and may be repeated.

    Raises:
        BadRequestError: QRY_001 if a field, operator or value is invalid
    """
    raw: dict[str, dict[str, Any]] = {}
    for key, value in params:
        if "." not in key:
            continue
        field, _, op = key.partition(".")
        ops = raw.setdefault(field, {})
        if op == FilterOp.IN.value:
            ops.setdefault(op, []).extend(item for item in value.split(",") if item)
        else:
            ops[op] = value

    try:
        return criteria_cls.model_validate(raw)
    except ValidationError as exc:
        fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        raise BadRequestError("QRY_001", {"fields": fields}) from exc
