"""Request checks shared by the entity routers."""

from collections.abc import Awaitable, Callable

from moneylogger.core.exceptions import BadRequestError


async def check_update_target(
    path_id: int,
    body_id: int | None,
    exists: Callable[[int], Awaitable[bool]],
    entity_name: str,
) -> None:
    """Validate the ids of a PUT/PATCH before the service is called.

    Raises:
        BadRequestError: API_002 if the body has no id, API_003 if it differs
            from the path id, API_004 if no such entity exists
    """
    if body_id is None:
        raise BadRequestError("API_002", {"entity": entity_name})
    if body_id != path_id:
        raise BadRequestError("API_003", {"entity": entity_name, "path_id": path_id, "body_id": body_id})
    if not await exists(path_id):
        raise BadRequestError("API_004", {"entity": entity_name, "id": path_id})


def check_create_payload(body_id: int | None, entity_name: str) -> None:
    """Reject a create request that already carries an id (API_001)."""
    if body_id is not None:
        raise BadRequestError("API_001", {"entity": entity_name, "id": body_id})
