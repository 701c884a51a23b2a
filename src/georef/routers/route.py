"""Route and route status endpoints."""

from fastapi import APIRouter

from georef.dependencies import DB
from georef.schemas.pagination import Page
from georef.schemas.route import (
    FilterRouteDTO,
    FilterRouteStatusDTO,
    RegisterRouteStatusDTO,
    RouteListResponseDTO,
    RouteStatusListResponseDTO,
    SaveRouteParamsDTO,
)
from georef.services import route as route_service

router = APIRouter(prefix="/routes", tags=["routes"])
status_router = APIRouter(prefix="/route-status", tags=["route-status"])


@router.get("", response_model=RouteListResponseDTO, status_code=200)
async def list_routes(db: DB, page: Page) -> RouteListResponseDTO:
    routes = await route_service.list_routes(db, page.page, page.limit)
    return RouteListResponseDTO(routes=FilterRouteDTO.filter_routes(routes), results=len(routes))


@router.get("/{route_id}", response_model=FilterRouteDTO, status_code=200)
async def get_route(db: DB, route_id: str) -> FilterRouteDTO:
    return FilterRouteDTO.filter_route(await route_service.get_route(db, route_id))


@router.post("", response_model=FilterRouteDTO, status_code=201)
async def save_route(db: DB, body: SaveRouteParamsDTO) -> FilterRouteDTO:
    return FilterRouteDTO.filter_route(await route_service.save_route(db, body))


@router.delete("/{route_id}", response_model=FilterRouteDTO, status_code=200)
async def delete_route(db: DB, route_id: str) -> FilterRouteDTO:
    return FilterRouteDTO.filter_route(await route_service.delete_route(db, route_id))


@status_router.get("", response_model=RouteStatusListResponseDTO, status_code=200)
async def list_route_statuses(db: DB, page: Page) -> RouteStatusListResponseDTO:
    statuses = await route_service.list_route_statuses(db, page.page, page.limit)
    return RouteStatusListResponseDTO(
        statuses=FilterRouteStatusDTO.filter_statuses(statuses), results=len(statuses)
    )


@status_router.get("/code/{code}", response_model=FilterRouteStatusDTO, status_code=200)
async def get_route_status_by_code(db: DB, code: str) -> FilterRouteStatusDTO:
    """Look a route status up by its code instead of its ID."""
    route_status = await route_service.get_route_status(db, code=code)
    return FilterRouteStatusDTO.filter_status(route_status)


@status_router.get("/{status_id}", response_model=FilterRouteStatusDTO, status_code=200)
async def get_route_status(db: DB, status_id: str) -> FilterRouteStatusDTO:
    route_status = await route_service.get_route_status(db, status_id=status_id)
    return FilterRouteStatusDTO.filter_status(route_status)


@status_router.post("", response_model=FilterRouteStatusDTO, status_code=201)
async def register_route_status(db: DB, body: RegisterRouteStatusDTO) -> FilterRouteStatusDTO:
    route_status = await route_service.register_route_status(db, body)
    return FilterRouteStatusDTO.filter_status(route_status)


@status_router.delete("/{status_id}", response_model=FilterRouteStatusDTO, status_code=200)
async def delete_route_status(db: DB, status_id: str) -> FilterRouteStatusDTO:
    route_status = await route_service.delete_route_status(db, status_id)
    return FilterRouteStatusDTO.filter_status(route_status)
