"""Tests for failure classification in the service layer."""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from georef.exceptions import ErrorMessage, HttpError
from georef.repositories import city as city_repo
from georef.repositories import route as route_repo
from georef.schemas.city import RegisterCityDTO
from georef.schemas.route import RegisterRouteStatusDTO, SaveRouteParamsDTO
from georef.services import city as city_service
from georef.services import route as route_service
from georef.services.storage_errors import sqlstate
from tests.factories import set_rows


class DriverError(Exception):
    """Mimics the driver exception SQLAlchemy wraps, with its SQLSTATE."""

    def __init__(self, code: str) -> None:
        super().__init__(f"sqlstate {code}")
        self.sqlstate = code


def integrity_error(code: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, DriverError(code))


def failing(exc: Exception) -> AsyncMock:
    return AsyncMock(side_effect=exc)


def _city_body() -> RegisterCityDTO:
    return RegisterCityDTO(name="Campinas", code="3509502", state_id=str(uuid.uuid4()))


def test_sqlstate_reads_driver_code() -> None:
    assert sqlstate(integrity_error("23505")) == "23505"
    assert sqlstate(IntegrityError("INSERT ...", {}, Exception("no code"))) is None


# ---------------------------------------------------------------------------
# Cities
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_get_city_malformed_id_is_bad_request(mock_db: AsyncMock) -> None:
    with pytest.raises(HttpError) as exc_info:
        await city_service.get_city(mock_db, "not-a-uuid")

    assert exc_info.value.status == 400
    assert "city_id" in exc_info.value.message
    mock_db.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_city_missing_is_city_not_found(mock_db: AsyncMock) -> None:
    set_rows(mock_db)

    with pytest.raises(HttpError) as exc_info:
        await city_service.get_city(mock_db, str(uuid.uuid4()))

    assert exc_info.value.status == 404
    assert exc_info.value.message == ErrorMessage.CITY_NOT_FOUND.to_str()


@pytest.mark.asyncio
async def test_register_city_duplicate_code_is_city_exist(
    mock_db: AsyncMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(city_repo, "save_city", failing(integrity_error("23505")))

    with pytest.raises(HttpError) as exc_info:
        await city_service.register_city(mock_db, _city_body())

    assert exc_info.value.status == 409
    assert exc_info.value.message == ErrorMessage.CITY_EXIST.to_str()


@pytest.mark.asyncio
async def test_register_city_unknown_state_is_state_not_found(
    mock_db: AsyncMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(city_repo, "save_city", failing(integrity_error("23503")))

    with pytest.raises(HttpError) as exc_info:
        await city_service.register_city(mock_db, _city_body())

    assert exc_info.value.status == 404
    assert exc_info.value.message == ErrorMessage.STATE_NOT_FOUND.to_str()


@pytest.mark.asyncio
async def test_unclassified_storage_error_is_generic_server_error(
    mock_db: AsyncMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    error = OperationalError("SELECT ...", {}, Exception("connection reset by peer"))
    monkeypatch.setattr(city_repo, "list_cities", failing(error))

    with pytest.raises(HttpError) as exc_info:
        await city_service.list_cities(mock_db, 1, 10)

    assert exc_info.value.status == 500
    assert exc_info.value.message == ErrorMessage.SERVER_ERROR.to_str()
    assert "connection reset" not in exc_info.value.message
    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_delete_city_still_referenced_is_bad_request(
    mock_db: AsyncMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(city_repo, "delete_city", failing(integrity_error("23503")))

    with pytest.raises(HttpError) as exc_info:
        await city_service.delete_city(mock_db, str(uuid.uuid4()))

    assert exc_info.value.status == 400


# ---------------------------------------------------------------------------
# Routes and route statuses
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_delete_route_missing_is_route_not_found(mock_db: AsyncMock) -> None:
    set_rows(mock_db)

    with pytest.raises(HttpError) as exc_info:
        await route_service.delete_route(mock_db, str(uuid.uuid4()))

    assert exc_info.value.status == 404
    assert exc_info.value.message == ErrorMessage.ROUTE_NOT_FOUND.to_str()


@pytest.mark.asyncio
async def test_save_route_malformed_vehicle_id_is_bad_request(mock_db: AsyncMock) -> None:
    params = SaveRouteParamsDTO(
        initial_lat=1, initial_long=2, status_id=str(uuid.uuid4()), vehicle_id="bogus"
    )

    with pytest.raises(HttpError) as exc_info:
        await route_service.save_route(mock_db, params)

    assert exc_info.value.status == 400
    assert "vehicle_id" in exc_info.value.message


@pytest.mark.asyncio
@pytest.mark.parametrize("code", ["23503", "23514"], ids=["foreign_key", "check"])
async def test_save_route_constraint_violations_are_bad_requests(
    mock_db: AsyncMock, monkeypatch: pytest.MonkeyPatch, code: str
) -> None:
    monkeypatch.setattr(route_repo, "save_route", failing(integrity_error(code)))
    params = SaveRouteParamsDTO(
        initial_lat=1, initial_long=2, status_id=str(uuid.uuid4()), vehicle_id=str(uuid.uuid4())
    )

    with pytest.raises(HttpError) as exc_info:
        await route_service.save_route(mock_db, params)

    assert exc_info.value.status == 400


@pytest.mark.asyncio
async def test_register_route_status_duplicate_is_route_status_exist(
    mock_db: AsyncMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(route_repo, "save_route_status", failing(integrity_error("23505")))

    with pytest.raises(HttpError) as exc_info:
        await route_service.register_route_status(
            mock_db, RegisterRouteStatusDTO(code="DONE", description="Finished")
        )

    assert exc_info.value.status == 409
    assert exc_info.value.message == ErrorMessage.ROUTE_STATUS_EXIST.to_str()


@pytest.mark.asyncio
async def test_get_route_status_without_id_or_code_is_not_found(mock_db: AsyncMock) -> None:
    with pytest.raises(HttpError) as exc_info:
        await route_service.get_route_status(mock_db)

    assert exc_info.value.status == 404
    mock_db.execute.assert_not_awaited()
