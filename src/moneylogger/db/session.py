"""Async engine and per-request sessions.

One engine per process. Each request gets its own ``AsyncSession`` from
``get_db``; services commit or roll back on it, repositories only flush.
"""

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from moneylogger.config import settings

# SQL echo would log amounts and details; only honoured in development.
async_engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo and settings.app_env.lower() == "development",
    pool_pre_ping=True,
)

# Objects stay readable after commit so services can build DTOs from them.
AsyncSessionLocal = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a session that is closed after the request."""
    async with AsyncSessionLocal() as session:
        yield session
