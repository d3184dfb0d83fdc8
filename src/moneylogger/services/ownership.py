"""Ownership checks run before any single-entity read, update or delete.

An entity belongs to the login recorded in its ``created_by`` column. The
checks here compare that login with the caller's and raise the matching
service error; they never modify anything.
"""

import logging
from dataclasses import dataclass
from typing import TypeVar

from moneylogger.core.context import RequestContext
from moneylogger.core.exceptions import ForbiddenError, InvalidReferenceError, NotFoundError
from moneylogger.models.base import BaseModel
from moneylogger.models.category import Category

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class GuardedEntity:
    """Error codes reported for one entity type."""

    name: str
    not_found_code: str
    forbidden_code: str


CATEGORY = GuardedEntity("Category", not_found_code="API_005", forbidden_code="API_007")
TRANSACTION = GuardedEntity("Transaction", not_found_code="API_006", forbidden_code="API_008")


def ensure_owned(
    entity: T | None, ctx: RequestContext, kind: GuardedEntity, entity_id: int | None = None
) -> T:
    """Return ``entity`` if it exists and the caller created it.

    Raises:
        NotFoundError: If no entity was found
        ForbiddenError: If the entity was created by someone else
    """
    if entity is None:
        raise NotFoundError(kind.not_found_code, {"entity": kind.name, "id": entity_id})

    if not entity.is_owned_by(ctx.login):
        logger.warning(
            f"Access denied to {kind.name}",
            extra={
                "entity_id": entity.id,
                "login": ctx.login,
                "request_id": ctx.request_id,
            },
        )
        raise ForbiddenError(kind.forbidden_code, {"entity": kind.name, "id": entity.id})

    return entity


def ensure_category_reference(
    category: Category | None, ctx: RequestContext, category_id: int
) -> Category:
    """Return a category referenced from a payload if the caller may link to it.

    Unlike ensure_owned, both a missing category and someone else's category
    are reported as bad input on the referencing payload.

    Raises:
        InvalidReferenceError: If the category is missing or not the caller's
    """
    if category is None or not category.is_owned_by(ctx.login):
        logger.warning(
            "Invalid category reference",
            extra={
                "category_id": category_id,
                "login": ctx.login,
                "request_id": ctx.request_id,
            },
        )
        raise InvalidReferenceError("API_009", {"category_id": category_id})
    return category
