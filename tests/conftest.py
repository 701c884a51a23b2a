from collections.abc import AsyncIterator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from georef.db.session import Base, get_db
from georef.main import app

# Fixtures in other modules are only visible to pytest when registered here.
pytest_plugins = ["tests.seeds"]

# Separate Postgres database for integration tests
TEST_DATABASE_URL = "postgresql+asyncpg://georef@localhost:5432/georef_test"

engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)
async_session = async_sessionmaker(engine, expire_on_commit=False)

_database_available: bool | None = None


async def _check_database() -> bool:
    global _database_available
    if _database_available is None:
        try:
            async with engine.connect():
                pass
        except Exception:
            _database_available = False
        else:
            _database_available = True
    return _database_available


@pytest_asyncio.fixture
async def db() -> AsyncIterator[AsyncSession]:
    """Create tables and yield a session, then drop tables after the test."""
    if not await _check_database():
        pytest.skip("test database is not reachable")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncIterator[AsyncClient]:
    """HTTP client that uses the test database session."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        try:
            yield db
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def mock_db() -> AsyncMock:
    """A stand-in AsyncSession; use ``set_rows`` to script query results."""
    return AsyncMock(spec=AsyncSession)


@pytest_asyncio.fixture
async def api_client(mock_db: AsyncMock) -> AsyncIterator[AsyncClient]:
    """HTTP client backed by ``mock_db``; needs no database."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        # Unhandled errors are rendered by the app, not re-raised into the test
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
