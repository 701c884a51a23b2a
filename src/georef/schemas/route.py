"""Route and route status request/response schemas."""

from collections.abc import Sequence
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from georef.models import Route, RouteStatus

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SaveRouteParamsDTO(BaseModel):
    """Body of POST /routes.

    Identifiers stay strings here; save_route parses them before the
    insert so a malformed ID is reported as a bad request. Missing final
    coordinates are stored as 0.
    """

    model_config = _CAMEL

    initial_lat: Decimal = Field(ge=-90, le=90)
    initial_long: Decimal = Field(ge=-180, le=180)
    final_lat: Decimal | None = Field(default=None, ge=-90, le=90)
    final_long: Decimal | None = Field(default=None, ge=-180, le=180)
    status_id: str
    initial_address_id: str | None = None
    final_address_id: str | None = None
    vehicle_id: str


class FilterRouteDTO(BaseModel):
    model_config = _CAMEL

    id: str
    initial_lat: Decimal
    initial_long: Decimal
    final_lat: Decimal
    final_long: Decimal
    initial_address_id: str | None
    final_address_id: str | None
    vehicle_id: str
    status_id: str

    @classmethod
    def filter_route(cls, route: Route) -> "FilterRouteDTO":
        return cls(
            id=str(route.id),
            initial_lat=route.initial_lat,
            initial_long=route.initial_long,
            final_lat=route.final_lat,
            final_long=route.final_long,
            initial_address_id=_optional_str(route.initial_address_id),
            final_address_id=_optional_str(route.final_address_id),
            vehicle_id=str(route.vehicle_id),
            status_id=str(route.status_id),
        )

    @classmethod
    def filter_routes(cls, routes: Sequence[Route]) -> list["FilterRouteDTO"]:
        return [cls.filter_route(route) for route in routes]


class RouteListResponseDTO(BaseModel):
    routes: list[FilterRouteDTO]
    results: int


class RegisterRouteStatusDTO(BaseModel):
    """Body of POST /route-status. A missing code is stored as ""."""

    code: str | None = Field(default=None, max_length=50)
    description: str = Field(min_length=1, max_length=200)


class FilterRouteStatusDTO(BaseModel):
    id: str
    code: str
    description: str

    @classmethod
    def filter_status(cls, route_status: RouteStatus) -> "FilterRouteStatusDTO":
        return cls(
            id=str(route_status.id),
            code=route_status.code,
            description=route_status.description,
        )

    @classmethod
    def filter_statuses(
        cls, statuses: Sequence[RouteStatus]
    ) -> list["FilterRouteStatusDTO"]:
        return [cls.filter_status(route_status) for route_status in statuses]


class RouteStatusListResponseDTO(BaseModel):
    statuses: list[FilterRouteStatusDTO]
    results: int


def _optional_str(value: object | None) -> str | None:
    return None if value is None else str(value)
