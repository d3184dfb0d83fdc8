import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# Settings are read at import time; the app must never reach a real database.
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("JWT_SECRET", "test-secret-key")

from moneylogger.core.context import RequestContext  # noqa: E402
from moneylogger.core.security import create_access_token  # noqa: E402
from moneylogger.db.session import get_db  # noqa: E402
from moneylogger.main import app  # noqa: E402

OWNER_LOGIN = "alice"
OTHER_LOGIN = "bob"


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database.
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {}


test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_options(TEST_DATABASE_URL))
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    This fixture is intentionally NOT autouse so pure unit tests (criteria,
    pagination, security) run without a database.
    """
    from moneylogger.models.base import BaseModel

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)

    # Dispose of pooled connections so none is reused across event loops
    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def owner_ctx() -> RequestContext:
    return RequestContext(login=OWNER_LOGIN)


@pytest.fixture
def other_ctx() -> RequestContext:
    return RequestContext(login=OTHER_LOGIN)


@pytest.fixture
def auth_headers() -> dict:
    """Authentication headers for the owner."""
    return {"Authorization": f"Bearer {create_access_token(OWNER_LOGIN)}"}


@pytest.fixture
def other_auth_headers() -> dict:
    """Authentication headers for a second, unrelated user."""
    return {"Authorization": f"Bearer {create_access_token(OTHER_LOGIN)}"}


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_category(db_session: AsyncSession):
    """Factory persisting a category for a given creator."""
    from moneylogger.models.category import Category
    from moneylogger.repositories.category import CategoryRepository

    async def _make(name: str = "Groceries", login: str = OWNER_LOGIN) -> Category:
        category = await CategoryRepository(db_session).add(
            Category(name=name, created_by=login, last_modified_by=login)
        )
        await db_session.commit()
        return category

    return _make


@pytest.fixture
def make_transaction(db_session: AsyncSession):
    """Factory persisting a transaction for a given creator."""
    from decimal import Decimal

    from moneylogger.models.transaction import Transaction
    from moneylogger.repositories.transaction import TransactionRepository

    async def _make(
        amount: str = "10.50",
        details: str = "Weekly shopping",
        login: str = OWNER_LOGIN,
        category=None,
    ) -> Transaction:
        transaction = await TransactionRepository(db_session).add(
            Transaction(
                amount=Decimal(amount),
                details=details,
                category=category,
                created_by=login,
                last_modified_by=login,
            )
        )
        await db_session.commit()
        return transaction

    return _make
