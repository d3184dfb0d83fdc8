"""API version 1 routes."""

from fastapi import APIRouter

from moneylogger.api.v1 import categories, transactions
from moneylogger.config import settings

router = APIRouter(prefix=settings.api_prefix)

# Include routers
router.include_router(categories.router)
router.include_router(transactions.router)
