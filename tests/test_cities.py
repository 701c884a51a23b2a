"""Tests for the /api/v1/cities endpoints."""

import uuid
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from georef.exceptions import ErrorMessage
from tests.factories import make_city, set_rows
from tests.seeds import Seed

CITY_NOT_FOUND_BODY = (
    b'{"error":{"status":"error","code":"404",'
    b'"message":"The city with the provided ID does not exist in our records",'
    b'"hint":"Ensure the city ID is correct and exists in the database. '
    b"Use the 'GET /api/v1/cities' endpoint to retrieve available city IDs.\"}}"
)


# ---------------------------------------------------------------------------
# Error envelopes (mocked session, no database)
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_get_unknown_city_returns_exact_not_found_body(
    api_client: AsyncClient, mock_db: AsyncMock
) -> None:
    set_rows(mock_db)

    resp = await api_client.get(f"/api/v1/cities/{uuid.uuid4()}")

    assert resp.status_code == 404
    assert resp.content == CITY_NOT_FOUND_BODY


@pytest.mark.asyncio
async def test_get_city_with_malformed_id_is_400(
    api_client: AsyncClient, mock_db: AsyncMock
) -> None:
    resp = await api_client.get("/api/v1/cities/not-a-uuid")

    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["status"] == "fail"
    assert error["code"] == "400"
    assert error["hint"] == "Check the request parameters and try again."
    mock_db.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_city_returns_camel_case_body(
    api_client: AsyncClient, mock_db: AsyncMock
) -> None:
    city = make_city(state_id=uuid.uuid4())
    set_rows(mock_db, city)

    resp = await api_client.get(f"/api/v1/cities/{city.id}")

    assert resp.status_code == 200
    assert resp.json() == {
        "id": str(city.id),
        "name": city.name,
        "code": city.code,
        "stateId": str(city.state_id),
    }


@pytest.mark.asyncio
async def test_register_city_validation_failure_uses_envelope(api_client: AsyncClient) -> None:
    resp = await api_client.post(
        "/api/v1/cities",
        json={"name": "Campinas", "code": "123", "stateId": str(uuid.uuid4())},
    )

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Code must be 7 characters long"


@pytest.mark.asyncio
async def test_invalid_page_is_400(api_client: AsyncClient) -> None:
    resp = await api_client.get("/api/v1/cities", params={"page": 0})
    assert resp.status_code == 400
    assert resp.json()["error"]["status"] == "fail"


@pytest.mark.asyncio
async def test_limit_over_max_is_400(api_client: AsyncClient) -> None:
    resp = await api_client.get("/api/v1/cities", params={"limit": 101})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_unhandled_exception_returns_canonical_server_error(
    api_client: AsyncClient, mock_db: AsyncMock
) -> None:
    mock_db.execute.side_effect = RuntimeError("boom")

    resp = await api_client.get(f"/api/v1/cities/{uuid.uuid4()}")

    assert resp.status_code == 500
    assert resp.json() == {
        "error": {
            "status": "error",
            "code": "500",
            "message": ErrorMessage.SERVER_ERROR.to_str(),
            "hint": ErrorMessage.SERVER_ERROR.hint(),
        }
    }


@pytest.mark.asyncio
async def test_request_id_is_echoed(api_client: AsyncClient, mock_db: AsyncMock) -> None:
    set_rows(mock_db)
    resp = await api_client.get("/api/v1/cities", headers={"X-Request-ID": "req-42"})
    assert resp.headers["X-Request-ID"] == "req-42"


# ---------------------------------------------------------------------------
# Integration (Postgres)
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_list_cities_paginates(client: AsyncClient, seeded_db: Seed) -> None:
    first = await client.get("/api/v1/cities", params={"page": 1, "limit": 2})
    second = await client.get("/api/v1/cities", params={"page": 2, "limit": 2})

    assert first.json()["results"] == 2
    assert [c["name"] for c in first.json()["cities"]] == ["Campinas", "Santos"]
    assert [c["name"] for c in second.json()["cities"]] == ["Sorocaba"]


@pytest.mark.asyncio
async def test_register_city(client: AsyncClient, seeded_db: Seed) -> None:
    state_id = str(seeded_db.state.id)
    resp = await client.post(
        "/api/v1/cities", json={"name": "Jundiaí", "code": "3525904", "stateId": state_id}
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["code"] == "3525904"
    assert body["stateId"] == state_id
    uuid.UUID(body["id"])


@pytest.mark.asyncio
async def test_register_duplicate_city_code_is_409(client: AsyncClient, seeded_db: Seed) -> None:
    resp = await client.post(
        "/api/v1/cities",
        json={"name": "Other", "code": "3509502", "stateId": str(seeded_db.state.id)},
    )

    assert resp.status_code == 409
    error = resp.json()["error"]
    assert error["status"] == "fail"
    assert error["message"] == ErrorMessage.CITY_EXIST.to_str()


@pytest.mark.asyncio
async def test_register_city_with_unknown_state_is_404(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/v1/cities",
        json={"name": "Nowhere", "code": "0000000", "stateId": str(uuid.uuid4())},
    )

    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == ErrorMessage.STATE_NOT_FOUND.to_str()


@pytest.mark.asyncio
async def test_delete_city_then_get_is_404(client: AsyncClient, seeded_db: Seed) -> None:
    city_id = seeded_db.cities[0].id

    deleted = await client.delete(f"/api/v1/cities/{city_id}")
    assert deleted.status_code == 200
    assert deleted.json()["id"] == str(city_id)

    resp = await client.get(f"/api/v1/cities/{city_id}")
    assert resp.status_code == 404
    assert resp.content == CITY_NOT_FOUND_BODY
