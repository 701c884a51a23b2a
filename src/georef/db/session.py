from collections.abc import AsyncGenerator

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from georef.config import settings

# Constraint names follow these templates so Alembic autogenerate produces
# stable names, and so storage errors can be traced back to a constraint.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    Base.metadata tracks every registered table (cities, routes,
    route_status, ...) and carries the naming convention above.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_recycle=settings.db_pool_recycle,
    pool_pre_ping=settings.db_pool_pre_ping,
    echo=settings.db_echo,
    # Passed straight to asyncpg.connect()
    connect_args={"command_timeout": settings.db_statement_timeout},
)

# expire_on_commit=False keeps returned rows readable after the request
# transaction commits; expired attributes would need sync I/O to reload.
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides one database session per request.

    Commits on success and rolls back on any exception, including an
    HttpError raised by a service. Repositories and services never call
    commit() or rollback() themselves.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def shutdown() -> None:
    """Dispose of the connection pool. Called from the app lifespan."""
    await engine.dispose()
