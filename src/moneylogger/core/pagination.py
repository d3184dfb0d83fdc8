"""Page requests and page results for list endpoints."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy import Select

from moneylogger.core.exceptions import BadRequestError

T = TypeVar("T")


@dataclass(frozen=True)
class Pageable:
    """Requested page (0-based), page size and sort order.

    ``sort`` holds ``(property, descending)`` pairs in priority order.
    """

    page: int = 0
    size: int = 20
    sort: tuple[tuple[str, bool], ...] = ()

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    content: list[T]
    total: int
    pageable: Pageable = field(default_factory=Pageable)

    @property
    def total_pages(self) -> int:
        size = self.pageable.size
        return (self.total + size - 1) // size if self.total > 0 else 0


def parse_pageable(
    params: Iterable[tuple[str, str]],
    sortable: Iterable[str],
    default_size: int = 20,
    max_size: int = 2000,
) -> Pageable:
    """Read ``page``, ``size`` and repeated ``sort=property[,asc|desc]`` params.

    Raises:
        BadRequestError: QRY_002 on a negative page, a size outside
            ``1..max_size``, an unknown sort property or direction
    """
    allowed = set(sortable)
    page, size = 0, default_size
    sort: list[tuple[str, bool]] = []

    for key, value in params:
        if key == "page":
            page = _parse_int(value, "page")
        elif key == "size":
            size = _parse_int(value, "size")
        elif key == "sort":
            prop, _, direction = value.partition(",")
            direction = direction.strip().lower() or "asc"
            if prop not in allowed or direction not in ("asc", "desc"):
                raise BadRequestError("QRY_002", {"sort": value})
            sort.append((prop, direction == "desc"))

    if page < 0:
        raise BadRequestError("QRY_002", {"page": page})
    if not 1 <= size <= max_size:
        raise BadRequestError("QRY_002", {"size": size})

    return Pageable(page=page, size=size, sort=tuple(sort))


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise BadRequestError("QRY_002", {name: value}) from exc


def apply_paging(stmt: Select, pageable: Pageable, columns: Mapping[str, Any], tiebreaker: Any) -> Select:
    """Add ORDER BY, OFFSET and LIMIT for ``pageable`` to a select.

    The tiebreaker column is always ordered last so pages are stable.
    """
    order_by = []
    for prop, descending in pageable.sort:
        column = columns[prop]
        order_by.append(column.desc() if descending else column.asc())
    order_by.append(tiebreaker.asc())
    return stmt.order_by(*order_by).offset(pageable.offset).limit(pageable.size)
