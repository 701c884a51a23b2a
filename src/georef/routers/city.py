"""City endpoints."""

from fastapi import APIRouter

from georef.dependencies import DB
from georef.schemas.city import CityListResponseDTO, FilterCityDTO, RegisterCityDTO
from georef.schemas.pagination import Page
from georef.services import city as city_service

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("", response_model=CityListResponseDTO, status_code=200)
async def list_cities(db: DB, page: Page) -> CityListResponseDTO:
    cities = await city_service.list_cities(db, page.page, page.limit)
    return CityListResponseDTO(cities=FilterCityDTO.filter_cities(cities), results=len(cities))


@router.get("/{city_id}", response_model=FilterCityDTO, status_code=200)
async def get_city(db: DB, city_id: str) -> FilterCityDTO:
    return FilterCityDTO.filter_city(await city_service.get_city(db, city_id))


@router.post("", response_model=FilterCityDTO, status_code=201)
async def register_city(db: DB, body: RegisterCityDTO) -> FilterCityDTO:
    return FilterCityDTO.filter_city(await city_service.register_city(db, body))


@router.delete("/{city_id}", response_model=FilterCityDTO, status_code=200)
async def delete_city(db: DB, city_id: str) -> FilterCityDTO:
    return FilterCityDTO.filter_city(await city_service.delete_city(db, city_id))
