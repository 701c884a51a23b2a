"""City business logic.

Calls the city repository and turns absent rows and storage errors into
HttpError so routers only ever see models or a raised HttpError.
"""

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from georef.exceptions import ErrorMessage, HttpError, InvalidIdentifierError
from georef.identifiers import parse_identifier
from georef.logging import get_logger
from georef.models import City
from georef.repositories import city as city_repo
from georef.schemas.city import RegisterCityDTO
from georef.services.storage_errors import (
    is_foreign_key_violation,
    is_unique_violation,
    server_error,
)

logger = get_logger(__name__)


async def get_city(db: AsyncSession, city_id: str) -> City:
    try:
        city = await city_repo.get_city(db, parse_identifier(city_id, "city_id"))
    except InvalidIdentifierError as exc:
        raise HttpError.bad_request(str(exc)) from exc
    except DBAPIError as exc:
        raise server_error("get_city", exc) from exc

    if city is None:
        raise HttpError.from_error_message(ErrorMessage.CITY_NOT_FOUND)
    return city


async def list_cities(db: AsyncSession, page: int, limit: int) -> list[City]:
    try:
        return await city_repo.list_cities(db, page, limit)
    except DBAPIError as exc:
        raise server_error("list_cities", exc) from exc


async def register_city(db: AsyncSession, body: RegisterCityDTO) -> City:
    """Store a new city.

    A duplicate code is a CITY_EXIST conflict; an unknown state is
    STATE_NOT_FOUND.
    """
    try:
        state_id = parse_identifier(body.state_id, "state_id")
        city = await city_repo.save_city(db, body.name, body.code, state_id)
    except InvalidIdentifierError as exc:
        raise HttpError.bad_request(str(exc)) from exc
    except IntegrityError as exc:
        if is_unique_violation(exc):
            raise HttpError.from_error_message(ErrorMessage.CITY_EXIST) from exc
        if is_foreign_key_violation(exc):
            raise HttpError.from_error_message(ErrorMessage.STATE_NOT_FOUND) from exc
        raise server_error("register_city", exc) from exc
    except DBAPIError as exc:
        raise server_error("register_city", exc) from exc

    logger.info("city_registered", city_id=str(city.id), code=city.code)
    return city


async def delete_city(db: AsyncSession, city_id: str) -> City:
    try:
        city = await city_repo.delete_city(db, parse_identifier(city_id, "city_id"))
    except InvalidIdentifierError as exc:
        raise HttpError.bad_request(str(exc)) from exc
    except IntegrityError as exc:
        if is_foreign_key_violation(exc):
            raise HttpError.bad_request(
                "The city is still referenced by one or more addresses"
            ) from exc
        raise server_error("delete_city", exc) from exc
    except DBAPIError as exc:
        raise server_error("delete_city", exc) from exc

    if city is None:
        raise HttpError.from_error_message(ErrorMessage.CITY_NOT_FOUND)
    logger.info("city_deleted", city_id=str(city.id))
    return city
