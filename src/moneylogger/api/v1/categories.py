"""Category management endpoints."""

from fastapi import APIRouter, Depends, Request, Response, status

from moneylogger.api.deps import (
    get_category_query_service,
    get_category_service,
    get_request_context,
)
from moneylogger.api.headers import entity_alert, pagination_headers
from moneylogger.api.v1.common import check_create_payload, check_update_target
from moneylogger.config import settings
from moneylogger.core.context import RequestContext
from moneylogger.core.criteria import parse_criteria
from moneylogger.core.pagination import parse_pageable
from moneylogger.schemas.category import CategoryCriteria, CategoryDTO, CategoryPatchDTO
from moneylogger.services.category import CategoryService
from moneylogger.services.query import CATEGORY_SORT_COLUMNS, CategoryQueryService

router = APIRouter(prefix="/categories", tags=["categories"])

ENTITY_NAME = "Category"


@router.post(
    "",
    response_model=CategoryDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
    responses={400: {"description": "Id already set"}},
)
async def create_category(
    dto: CategoryDTO,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    service: CategoryService = Depends(get_category_service),
) -> CategoryDTO:
    check_create_payload(dto.id, ENTITY_NAME)
    result = await service.save(dto, ctx)

    response.headers["Location"] = f"{settings.api_prefix}/categories/{result.id}"
    response.headers.update(entity_alert(ENTITY_NAME, "created", result.id))
    return result


@router.put(
    "/{category_id}",
    response_model=CategoryDTO,
    summary="Replace a category",
    responses={
        400: {"description": "Missing, mismatched or unknown id"},
        403: {"description": "Access denied"},
    },
)
async def update_category(
    category_id: int,
    dto: CategoryDTO,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    service: CategoryService = Depends(get_category_service),
) -> CategoryDTO:
    await check_update_target(category_id, dto.id, service.exists, ENTITY_NAME)
    result = await service.save(dto, ctx)

    response.headers.update(entity_alert(ENTITY_NAME, "updated", category_id))
    return result


@router.patch(
    "/{category_id}",
    response_model=CategoryDTO,
    summary="Partially update a category",
    responses={
        400: {"description": "Missing, mismatched or unknown id"},
        403: {"description": "Access denied"},
        404: {"description": "Category not found"},
    },
)
async def partial_update_category(
    category_id: int,
    dto: CategoryPatchDTO,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    service: CategoryService = Depends(get_category_service),
) -> CategoryDTO:
    await check_update_target(category_id, dto.id, service.exists, ENTITY_NAME)
    result = await service.partial_update(dto, ctx)

    response.headers.update(entity_alert(ENTITY_NAME, "updated", category_id))
    return result


@router.get(
    "",
    response_model=list[CategoryDTO],
    summary="List categories with filters",
    description="""
    List the authenticated user's categories.

    Filters: `id`, `name` (also `contains` / `doesNotContain`) and
    `transactionId`, using the same `field.operator=value` syntax and paging
    parameters as the transaction list.
    """,
)
async def list_categories(
    request: Request,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    query_service: CategoryQueryService = Depends(get_category_query_service),
) -> list[CategoryDTO]:
    params = request.query_params.multi_items()
    criteria = parse_criteria(params, CategoryCriteria)
    pageable = parse_pageable(
        params,
        CATEGORY_SORT_COLUMNS,
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )

    page = await query_service.find_by_criteria(criteria, pageable, ctx)
    response.headers.update(pagination_headers(request.url, page))
    return page.content


@router.get("/count", response_model=int, summary="Count categories matching filters")
async def count_categories(
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
    query_service: CategoryQueryService = Depends(get_category_query_service),
) -> int:
    criteria = parse_criteria(request.query_params.multi_items(), CategoryCriteria)
    return await query_service.count_by_criteria(criteria, ctx)


@router.get(
    "/{category_id}",
    response_model=CategoryDTO,
    summary="Get a category",
    responses={
        403: {"description": "Access denied"},
        404: {"description": "Category not found"},
    },
)
async def get_category(
    category_id: int,
    ctx: RequestContext = Depends(get_request_context),
    service: CategoryService = Depends(get_category_service),
) -> CategoryDTO:
    return await service.find_one(category_id, ctx)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a category",
    description="""
    Delete a category. Its transactions are kept and simply lose their
    category.
    """,
    responses={
        403: {"description": "Access denied"},
        404: {"description": "Category not found"},
    },
)
async def delete_category(
    category_id: int,
    ctx: RequestContext = Depends(get_request_context),
    service: CategoryService = Depends(get_category_service),
) -> Response:
    await service.delete(category_id, ctx)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=entity_alert(ENTITY_NAME, "deleted", category_id),
    )
