"""FastAPI dependency injection for caller identity, database and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from moneylogger.core.context import RequestContext
from moneylogger.core.errors import get_error
from moneylogger.core.security import get_login_from_token
from moneylogger.db.session import get_db
from moneylogger.services.category import CategoryService
from moneylogger.services.query import CategoryQueryService, TransactionQueryService
from moneylogger.services.transaction import TransactionService

# Bearer token scheme
security = HTTPBearer(auto_error=False)


async def get_request_context(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> RequestContext:
    """
    Resolve the caller's login from the bearer token.

    Args:
        request: Incoming request (for the request id and logging state)
        credentials: HTTP bearer token credentials

    Returns:
        RequestContext for the service calls of this request

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    error_def = get_error("AUTH_001")
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "error_code": "AUTH_001",
            "user_message": error_def["user_message"],
            "suggestion": error_def["suggestion"],
        },
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    try:
        login = get_login_from_token(credentials.credentials)
    except JWTError:
        raise credentials_exception

    request.state.login = login
    return RequestContext(login=login, request_id=getattr(request.state, "request_id", None))


async def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


async def get_transaction_service(db: AsyncSession = Depends(get_db)) -> TransactionService:
    return TransactionService(db)


async def get_category_query_service(
    db: AsyncSession = Depends(get_db),
) -> CategoryQueryService:
    return CategoryQueryService(db)


async def get_transaction_query_service(
    db: AsyncSession = Depends(get_db),
) -> TransactionQueryService:
    return TransactionQueryService(db)
