"""Route and route status business logic."""

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from georef.exceptions import ErrorMessage, HttpError, InvalidIdentifierError
from georef.identifiers import parse_identifier
from georef.logging import get_logger
from georef.models import Route, RouteStatus
from georef.repositories import route as route_repo
from georef.schemas.route import RegisterRouteStatusDTO, SaveRouteParamsDTO
from georef.services.storage_errors import (
    is_check_violation,
    is_foreign_key_violation,
    is_unique_violation,
    server_error,
)

logger = get_logger(__name__)


async def get_route(db: AsyncSession, route_id: str) -> Route:
    try:
        route = await route_repo.get_route(db, parse_identifier(route_id, "route_id"))
    except InvalidIdentifierError as exc:
        raise HttpError.bad_request(str(exc)) from exc
    except DBAPIError as exc:
        raise server_error("get_route", exc) from exc

    if route is None:
        raise HttpError.from_error_message(ErrorMessage.ROUTE_NOT_FOUND)
    return route


async def list_routes(db: AsyncSession, page: int, limit: int) -> list[Route]:
    try:
        return await route_repo.list_routes(db, page, limit)
    except DBAPIError as exc:
        raise server_error("list_routes", exc) from exc


async def save_route(db: AsyncSession, params: SaveRouteParamsDTO) -> Route:
    """Store a new route.

    The vehicle, status and address references are all foreign keys, and
    the driver error does not say which one failed, so a dangling
    reference is reported as a bad request rather than a specific
    NOT_FOUND.
    """
    try:
        route = await route_repo.save_route(db, params)
    except InvalidIdentifierError as exc:
        raise HttpError.bad_request(str(exc)) from exc
    except IntegrityError as exc:
        if is_foreign_key_violation(exc):
            raise HttpError.bad_request(
                "The vehicle, status or address referenced by the route does not exist"
            ) from exc
        if is_check_violation(exc):
            raise HttpError.bad_request("Route coordinates are out of range") from exc
        raise server_error("save_route", exc) from exc
    except DBAPIError as exc:
        raise server_error("save_route", exc) from exc

    logger.info("route_saved", route_id=str(route.id), status_id=str(route.status_id))
    return route


async def delete_route(db: AsyncSession, route_id: str) -> Route:
    try:
        route = await route_repo.delete_route(db, parse_identifier(route_id, "route_id"))
    except InvalidIdentifierError as exc:
        raise HttpError.bad_request(str(exc)) from exc
    except DBAPIError as exc:
        raise server_error("delete_route", exc) from exc

    if route is None:
        raise HttpError.from_error_message(ErrorMessage.ROUTE_NOT_FOUND)
    logger.info("route_deleted", route_id=str(route.id))
    return route


async def get_route_status(
    db: AsyncSession, status_id: str | None = None, code: str | None = None
) -> RouteStatus:
    """Fetch a route status by id or, failing that, by code."""
    try:
        parsed_id = parse_identifier(status_id, "status_id") if status_id is not None else None
        route_status = await route_repo.get_route_status(db, parsed_id, code)
    except InvalidIdentifierError as exc:
        raise HttpError.bad_request(str(exc)) from exc
    except DBAPIError as exc:
        raise server_error("get_route_status", exc) from exc

    if route_status is None:
        raise HttpError.from_error_message(ErrorMessage.ROUTE_STATUS_NOT_FOUND)
    return route_status


async def list_route_statuses(db: AsyncSession, page: int, limit: int) -> list[RouteStatus]:
    try:
        return await route_repo.list_route_statuses(db, page, limit)
    except DBAPIError as exc:
        raise server_error("list_route_statuses", exc) from exc


async def register_route_status(db: AsyncSession, body: RegisterRouteStatusDTO) -> RouteStatus:
    try:
        route_status = await route_repo.save_route_status(db, body.code, body.description)
    except IntegrityError as exc:
        if is_unique_violation(exc):
            raise HttpError.from_error_message(ErrorMessage.ROUTE_STATUS_EXIST) from exc
        raise server_error("register_route_status", exc) from exc
    except DBAPIError as exc:
        raise server_error("register_route_status", exc) from exc

    logger.info("route_status_registered", status_id=str(route_status.id), code=route_status.code)
    return route_status


async def delete_route_status(db: AsyncSession, status_id: str) -> RouteStatus:
    try:
        route_status = await route_repo.delete_route_status(
            db, parse_identifier(status_id, "status_id")
        )
    except InvalidIdentifierError as exc:
        raise HttpError.bad_request(str(exc)) from exc
    except IntegrityError as exc:
        if is_foreign_key_violation(exc):
            raise HttpError.bad_request(
                "The route status is still used by one or more routes"
            ) from exc
        raise server_error("delete_route_status", exc) from exc
    except DBAPIError as exc:
        raise server_error("delete_route_status", exc) from exc

    if route_status is None:
        raise HttpError.from_error_message(ErrorMessage.ROUTE_STATUS_NOT_FOUND)
    logger.info("route_status_deleted", status_id=str(route_status.id))
    return route_status
