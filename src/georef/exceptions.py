"""Error taxonomy and HTTP error responses.

Services classify failures into an ``ErrorMessage`` (or a raw bad request /
conflict / server error) and raise an ``HttpError``. Exception handlers in
main.py call ``HttpError.into_response()`` to produce the standard envelope:
{"error": {"status": "...", "code": "...", "message": "...", "hint": "..."}}.
"""

from enum import Enum
from types import MappingProxyType

from fastapi.responses import JSONResponse
from starlette import status

from georef.logging import get_logger
from georef.schemas.error import Response, ResponseDetails

logger = get_logger(__name__)


class ErrorMessage(Enum):
    """Closed set of domain failure conditions.

    Each member maps to exactly one message and one hint. Members whose
    name ends in ``_EXIST`` are conflicts; ``SERVER_ERROR`` is a server
    error; everything else is a not-found condition.
    """

    SERVER_ERROR = "server_error"
    COUNTRY_EXIST = "country_exist"
    COUNTRY_NOT_FOUND = "country_not_found"
    STATE_EXIST = "state_exist"
    STATE_NOT_FOUND = "state_not_found"
    CITY_EXIST = "city_exist"
    CITY_NOT_FOUND = "city_not_found"
    ADDRESS_EXIST = "address_exist"
    ADDRESS_NOT_FOUND = "address_not_found"
    ROUTE_NOT_FOUND = "route_not_found"
    ROUTE_STATUS_EXIST = "route_status_exist"
    ROUTE_STATUS_NOT_FOUND = "route_status_not_found"

    def to_str(self) -> str:
        return _MESSAGES[self]

    def hint(self) -> str:
        return _HINTS[self]

    def __str__(self) -> str:
        return self.to_str()


_MESSAGES = MappingProxyType(
    {
        ErrorMessage.SERVER_ERROR: "Server Error. Please try again later",
        ErrorMessage.COUNTRY_EXIST: "There is already a country with the provided data",
        ErrorMessage.COUNTRY_NOT_FOUND: (
            "The country with the provided ID does not exist in our records"
        ),
        ErrorMessage.STATE_EXIST: (
            "There is already a state with the provided code and countryId"
        ),
        ErrorMessage.STATE_NOT_FOUND: (
            "The state with the provided ID does not exist in our records"
        ),
        ErrorMessage.CITY_EXIST: "There is already a city with the provided code",
        ErrorMessage.CITY_NOT_FOUND: (
            "The city with the provided ID does not exist in our records"
        ),
        ErrorMessage.ADDRESS_EXIST: (
            "There is already an address with the provided address, number and zipCode"
        ),
        ErrorMessage.ADDRESS_NOT_FOUND: (
            "The address with the provided ID does not exist in our records"
        ),
        ErrorMessage.ROUTE_NOT_FOUND: (
            "The route with the provided ID does not exist in our records"
        ),
        ErrorMessage.ROUTE_STATUS_EXIST: (
            "There is already a route status with the provided code"
        ),
        ErrorMessage.ROUTE_STATUS_NOT_FOUND: (
            "The route status with the provided ID does not exist in our records"
        ),
    }
)

_HINTS = MappingProxyType(
    {
        ErrorMessage.SERVER_ERROR: (
            "Check server logs for more details and ensure the server is running correctly."
        ),
        ErrorMessage.COUNTRY_EXIST: (
            "Verify the country data you are trying to add is unique and does not already exist."
        ),
        ErrorMessage.COUNTRY_NOT_FOUND: (
            "Ensure the country ID is correct and exists in the database. "
            "Use the 'GET /api/v1/countries' endpoint to retrieve available country IDs."
        ),
        ErrorMessage.STATE_EXIST: (
            "Verify the state code and country ID are unique and do not already exist."
        ),
        ErrorMessage.STATE_NOT_FOUND: (
            "Ensure the state ID is correct and exists in the database. "
            "Use the 'GET /api/v1/states' endpoint to retrieve available state IDs."
        ),
        ErrorMessage.CITY_EXIST: "Verify the city code is unique and does not already exist.",
        ErrorMessage.CITY_NOT_FOUND: (
            "Ensure the city ID is correct and exists in the database. "
            "Use the 'GET /api/v1/cities' endpoint to retrieve available city IDs."
        ),
        ErrorMessage.ADDRESS_EXIST: (
            "Verify the address details are unique and do not already exist."
        ),
        ErrorMessage.ADDRESS_NOT_FOUND: (
            "Ensure the address ID is correct and exists in the database. "
            "Use the 'GET /api/v1/addresses' endpoint to retrieve available address IDs."
        ),
        ErrorMessage.ROUTE_NOT_FOUND: (
            "Ensure the route ID is correct and exists in the database. "
            "Use the 'GET /api/v1/routes' endpoint to retrieve available route IDs."
        ),
        ErrorMessage.ROUTE_STATUS_EXIST: (
            "Verify the route status code is unique and does not already exist."
        ),
        ErrorMessage.ROUTE_STATUS_NOT_FOUND: (
            "Ensure the route status ID is correct and exists in the database. "
            "Use the 'GET /api/v1/route-status' endpoint to retrieve available status IDs."
        ),
    }
)

_CONFLICTS = frozenset(
    {
        ErrorMessage.COUNTRY_EXIST,
        ErrorMessage.STATE_EXIST,
        ErrorMessage.CITY_EXIST,
        ErrorMessage.ADDRESS_EXIST,
        ErrorMessage.ROUTE_STATUS_EXIST,
    }
)

# Transport statuses an HttpError may be rendered with. Anything else is
# coerced to a canonical 500 by into_response().
_RENDERABLE_STATUSES = frozenset(
    {
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_404_NOT_FOUND,
        status.HTTP_409_CONFLICT,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
)

_CLIENT_FAILURES = frozenset({status.HTTP_400_BAD_REQUEST, status.HTTP_409_CONFLICT})


class InvalidIdentifierError(ValueError):
    """Raised when a string identifier is not a valid UUID."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Failed to parse {field}: {value!r} is not a valid UUID")


class HttpError(Exception):
    """An HTTP-level failure with a status, a message and a remediation hint.

    Raise it from services; the exception handler in main.py renders it
    with ``into_response()``. Construction and rendering never fail.
    """

    def __init__(self, status: int, message: str, hint: str) -> None:
        self.status = status
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        return f"HttpError: message: {self.message}, status: {self.status}"

    @classmethod
    def server_error(cls, message: str | ErrorMessage) -> "HttpError":
        return cls(
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=str(message),
            hint=ErrorMessage.SERVER_ERROR.hint(),
        )

    @classmethod
    def bad_request(cls, message: str | ErrorMessage) -> "HttpError":
        return cls(
            status=status.HTTP_400_BAD_REQUEST,
            message=str(message),
            hint="Check the request parameters and try again.",
        )

    @classmethod
    def unique_constraint_violation(cls, message: str | ErrorMessage) -> "HttpError":
        return cls(
            status=status.HTTP_409_CONFLICT,
            message=str(message),
            hint="Ensure the data you are trying to add is unique.",
        )

    @classmethod
    def from_error_message(cls, error_message: ErrorMessage) -> "HttpError":
        """Build an HttpError whose status is implied by the condition.

        SERVER_ERROR is a 500, every ``*_EXIST`` member is a 409 and all
        other members are 404s.
        """
        if error_message is ErrorMessage.SERVER_ERROR:
            code = status.HTTP_500_INTERNAL_SERVER_ERROR
        elif error_message in _CONFLICTS:
            code = status.HTTP_409_CONFLICT
        else:
            code = status.HTTP_404_NOT_FOUND
        return cls(status=code, message=error_message.to_str(), hint=error_message.hint())

    def to_envelope(self) -> Response:
        """Build the wire envelope from this error's own fields."""
        return Response(
            error=ResponseDetails(
                status="fail" if self.status in _CLIENT_FAILURES else "error",
                code=str(self.status),
                message=self.message,
                hint=self.hint,
            )
        )

    def into_response(self) -> JSONResponse:
        """Render this error as a JSON response.

        A status outside 400/401/404/409/500 is never sent to the client:
        the response becomes a 500 with the canonical SERVER_ERROR body and
        the original status is logged.
        """
        if self.status not in _RENDERABLE_STATUSES:
            logger.warning(
                "unmapped_error_status",
                original_status=self.status,
                coerced_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
            fallback = HttpError.from_error_message(ErrorMessage.SERVER_ERROR)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=fallback.to_envelope().model_dump(),
            )

        return JSONResponse(status_code=self.status, content=self.to_envelope().model_dump())
