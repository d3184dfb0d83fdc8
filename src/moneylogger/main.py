from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from moneylogger.api.middleware.error_handler import (
    handle_generic_error,
    handle_integrity_error,
    handle_money_logger_error,
    handle_validation_error,
)
from moneylogger.api.middleware.logging import RequestLoggingMiddleware, configure_logging
from moneylogger.api.v1 import router as v1_router
from moneylogger.api.v1.health import router as health_router
from moneylogger.config import settings
from moneylogger.core.exceptions import MoneyLoggerError
from moneylogger.db.session import async_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    yield
    # Shutdown
    await async_engine.dispose()


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Moneylogger API",
        description="Personal expense tracking: transactions, categories and totals",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(MoneyLoggerError, handle_money_logger_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
