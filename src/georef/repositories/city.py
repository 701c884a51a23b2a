"""City data-access layer.

Each function takes a session and returns models or ``None``. Storage
errors propagate to the service layer, which classifies them.
"""

from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from georef.models import City
from georef.schemas.pagination import page_offset


async def get_city(db: AsyncSession, city_id: UUID | None) -> City | None:
    if city_id is None:
        return None
    result = await db.execute(select(City).where(City.id == city_id))
    return result.scalar_one_or_none()


async def list_cities(db: AsyncSession, page: int, limit: int) -> list[City]:
    """Return one 1-based page of cities ordered by name."""
    stmt = (
        select(City)
        .order_by(City.name, City.id)
        .limit(limit)
        .offset(page_offset(page, limit))
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def save_city(db: AsyncSession, name: str, code: str, state_id: UUID) -> City:
    stmt = insert(City).values(name=name, code=code, state_id=state_id).returning(City)
    result = await db.execute(stmt)
    return result.scalar_one()


async def delete_city(db: AsyncSession, city_id: UUID | None) -> City | None:
    if city_id is None:
        return None
    result = await db.execute(delete(City).where(City.id == city_id).returning(City))
    return result.scalar_one_or_none()
