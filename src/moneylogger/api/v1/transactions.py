"""Transaction management endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Request, Response, status

from moneylogger.api.deps import (
    get_request_context,
    get_transaction_query_service,
    get_transaction_service,
)
from moneylogger.api.headers import entity_alert, pagination_headers
from moneylogger.api.v1.common import check_create_payload, check_update_target
from moneylogger.config import settings
from moneylogger.core.context import RequestContext
from moneylogger.core.criteria import parse_criteria
from moneylogger.core.pagination import parse_pageable
from moneylogger.schemas.transaction import (
    JsonDecimal,
    TransactionCriteria,
    TransactionDTO,
    TransactionPatchDTO,
)
from moneylogger.services.query import TRANSACTION_SORT_COLUMNS, TransactionQueryService
from moneylogger.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])

ENTITY_NAME = "Transaction"


@router.post(
    "",
    response_model=TransactionDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a transaction",
    description="""
    Record a new transaction for the authenticated user.

    The optional nested **category** either references one of the user's
    categories by id, or (without an id) creates a new category on the fly.
    """,
    responses={400: {"description": "Id already set or invalid category"}},
)
async def create_transaction(
    dto: TransactionDTO,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionDTO:
    check_create_payload(dto.id, ENTITY_NAME)
    result = await service.save(dto, ctx)

    response.headers["Location"] = f"{settings.api_prefix}/transactions/{result.id}"
    response.headers.update(entity_alert(ENTITY_NAME, "created", result.id))
    return result


@router.put(
    "/{transaction_id}",
    response_model=TransactionDTO,
    summary="Replace a transaction",
    responses={
        400: {"description": "Missing, mismatched or unknown id, or invalid category"},
        403: {"description": "Access denied"},
    },
)
async def update_transaction(
    transaction_id: int,
    dto: TransactionDTO,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionDTO:
    await check_update_target(transaction_id, dto.id, service.exists, ENTITY_NAME)
    result = await service.save(dto, ctx)

    response.headers.update(entity_alert(ENTITY_NAME, "updated", transaction_id))
    return result


@router.patch(
    "/{transaction_id}",
    response_model=TransactionDTO,
    summary="Partially update a transaction",
    description="""
    Merge-patch a transaction (`application/merge-patch+json`): only fields
    present and non-null in the body are changed.
    """,
    responses={
        400: {"description": "Missing, mismatched or unknown id, or invalid category"},
        403: {"description": "Access denied"},
        404: {"description": "Transaction not found"},
    },
)
async def partial_update_transaction(
    transaction_id: int,
    dto: TransactionPatchDTO,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionDTO:
    await check_update_target(transaction_id, dto.id, service.exists, ENTITY_NAME)
    result = await service.partial_update(dto, ctx)

    response.headers.update(entity_alert(ENTITY_NAME, "updated", transaction_id))
    return result


@router.get(
    "",
    response_model=list[TransactionDTO],
    summary="List transactions with filters",
    description="""
    List the authenticated user's transactions.

    ## Filters
    `field.operator=value` on **id**, **amount**, **details**, **date** and
    **categoryId**. Operators: `equals`, `notEquals`, `in` (comma separated),
    `greaterThan`, `greaterThanOrEqual`, `lessThan`, `lessThanOrEqual`,
    `specified`; **details** also takes `contains` and `doesNotContain`.

    ## Paging
    `page` (0-based), `size`, and repeatable `sort=property,asc|desc`.
    Totals and navigation links are returned in the `X-Total-Count` and
    `Link` headers.
    """,
)
async def list_transactions(
    request: Request,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    query_service: TransactionQueryService = Depends(get_transaction_query_service),
) -> list[TransactionDTO]:
    params = request.query_params.multi_items()
    criteria = parse_criteria(params, TransactionCriteria)
    pageable = parse_pageable(
        params,
        TRANSACTION_SORT_COLUMNS,
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )

    page = await query_service.find_by_criteria(criteria, pageable, ctx)
    response.headers.update(pagination_headers(request.url, page))
    return page.content


@router.get("/count", response_model=int, summary="Count transactions matching filters")
async def count_transactions(
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
    query_service: TransactionQueryService = Depends(get_transaction_query_service),
) -> int:
    criteria = parse_criteria(request.query_params.multi_items(), TransactionCriteria)
    return await query_service.count_by_criteria(criteria, ctx)


@router.get(
    "/totalAmount",
    response_model=JsonDecimal,
    summary="Sum of all the user's transaction amounts",
)
async def total_amount(
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> Decimal:
    return await service.get_total_amount(ctx)


@router.get(
    "/{transaction_id}",
    response_model=TransactionDTO,
    summary="Get a transaction",
    responses={
        403: {"description": "Access denied"},
        404: {"description": "Transaction not found"},
    },
)
async def get_transaction(
    transaction_id: int,
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionDTO:
    return await service.find_one(transaction_id, ctx)


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a transaction",
    responses={
        403: {"description": "Access denied"},
        404: {"description": "Transaction not found"},
    },
)
async def delete_transaction(
    transaction_id: int,
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> Response:
    await service.delete(transaction_id, ctx)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=entity_alert(ENTITY_NAME, "deleted", transaction_id),
    )
