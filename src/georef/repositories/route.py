"""Route and route status data-access layer.

Pure query functions: no business logic, no HTTP concerns. Storage errors
(IntegrityError, DBAPIError) propagate to the caller unchanged, and so does
InvalidIdentifierError when an identifier string cannot be parsed.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from georef.identifiers import parse_identifier, parse_optional_identifier
from georef.models import Route, RouteStatus
from georef.schemas.pagination import page_offset
from georef.schemas.route import SaveRouteParamsDTO


async def get_route(db: AsyncSession, route_id: UUID | None) -> Route | None:
    """Return the route with ``route_id``; no query is issued for ``None``."""
    if route_id is None:
        return None
    result = await db.execute(select(Route).where(Route.id == route_id))
    return result.scalar_one_or_none()


async def list_routes(db: AsyncSession, page: int, limit: int) -> list[Route]:
    """Return one 1-based page of routes."""
    stmt = select(Route).order_by(Route.created_at, Route.id).limit(limit)
    stmt = stmt.offset(page_offset(page, limit))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def save_route(db: AsyncSession, params: SaveRouteParamsDTO) -> Route:
    """Insert a route and return the stored row."""
    initial_address_id = parse_optional_identifier(
        params.initial_address_id, "initial_address_id"
    )
    final_address_id = parse_optional_identifier(params.final_address_id, "final_address_id")
    vehicle_id = parse_identifier(params.vehicle_id, "vehicle_id")
    status_id = parse_identifier(params.status_id, "status_id")

    stmt = (
        insert(Route)
        .values(
            initial_lat=params.initial_lat,
            initial_long=params.initial_long,
            final_lat=params.final_lat if params.final_lat is not None else Decimal(0),
            final_long=params.final_long if params.final_long is not None else Decimal(0),
            initial_address_id=initial_address_id,
            final_address_id=final_address_id,
            vehicle_id=vehicle_id,
            status_id=status_id,
        )
        .returning(Route)
    )
    result = await db.execute(stmt)
    return result.scalar_one()


async def delete_route(db: AsyncSession, route_id: UUID | None) -> Route | None:
    """Delete a route and return it, or ``None`` if nothing was deleted."""
    if route_id is None:
        return None
    result = await db.execute(delete(Route).where(Route.id == route_id).returning(Route))
    return result.scalar_one_or_none()


async def get_route_status(
    db: AsyncSession,
    status_id: UUID | None = None,
    code: str | None = None,
) -> RouteStatus | None:
    """Look a status up by id, else by code. With neither, return ``None``."""
    if status_id is not None:
        stmt = select(RouteStatus).where(RouteStatus.id == status_id)
    elif code is not None:
        stmt = select(RouteStatus).where(RouteStatus.code == code)
    else:
        return None
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_route_statuses(db: AsyncSession, page: int, limit: int) -> list[RouteStatus]:
    """Return one 1-based page of route statuses."""
    stmt = select(RouteStatus).order_by(RouteStatus.code, RouteStatus.id).limit(limit)
    stmt = stmt.offset(page_offset(page, limit))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def save_route_status(
    db: AsyncSession, code: str | None, description: str
) -> RouteStatus:
    """Insert a route status; a missing code is stored as an empty string."""
    stmt = (
        insert(RouteStatus)
        .values(code=code or "", description=description)
        .returning(RouteStatus)
    )
    result = await db.execute(stmt)
    return result.scalar_one()


async def delete_route_status(db: AsyncSession, status_id: UUID | None) -> RouteStatus | None:
    if status_id is None:
        return None
    stmt = delete(RouteStatus).where(RouteStatus.id == status_id).returning(RouteStatus)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()
