"""Liveness and readiness probes.

Readiness also checks that the migrated schema is in place, since every
other endpoint needs the category and transaction tables.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from moneylogger import __version__
from moneylogger.config import settings
from moneylogger.db.session import get_db
from moneylogger.models import Category, Transaction

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Process is up; touches nothing else."""
    return {"status": "ok", "service": settings.app_name, "version": __version__}


@router.get("/health/ready")
async def health_ready(db: AsyncSession = Depends(get_db)):
    """Database reachable and both tables queryable."""
    try:
        for model in (Category, Transaction):
            await db.execute(select(model.id).limit(1))
    except SQLAlchemyError as exc:
        logger.warning("Readiness check failed", extra={"error_type": type(exc).__name__})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not ready", "database": "unavailable", "error": type(exc).__name__},
        )
    return {"status": "ready", "database": "connected"}
