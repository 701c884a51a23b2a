"""City request/response schemas.

Field names are camelCase on the wire (``stateId``) and snake_case in
Python.
"""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from georef.identifiers import is_valid_uuid
from georef.models import City


class RegisterCityDTO(BaseModel):
    """Body of POST /cities."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    code: str
    state_id: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        if not 1 <= len(value) <= 100:
            raise PydanticCustomError("name_length", "Name must have a maximum of 100 characters")
        return value

    @field_validator("code")
    @classmethod
    def check_code(cls, value: str) -> str:
        if len(value) != 7:
            raise PydanticCustomError("code_length", "Code must be 7 characters long")
        return value

    @field_validator("state_id")
    @classmethod
    def check_state_id(cls, value: str) -> str:
        if not is_valid_uuid(value):
            raise PydanticCustomError("state_id_uuid", "State ID must be a valid UUID")
        return value


class FilterCityDTO(BaseModel):
    """Public view of a city; identifiers are rendered as strings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    code: str
    state_id: str

    @classmethod
    def filter_city(cls, city: City) -> "FilterCityDTO":
        return cls(
            id=str(city.id),
            name=city.name,
            code=city.code,
            state_id=str(city.state_id),
        )

    @classmethod
    def filter_cities(cls, cities: Sequence[City]) -> list["FilterCityDTO"]:
        return [cls.filter_city(city) for city in cities]


class CityListResponseDTO(BaseModel):
    cities: list[FilterCityDTO]
    results: int
