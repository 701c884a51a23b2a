"""SQLAlchemy models.

Define all ORM models here. They must inherit from Base so that
Alembic's autogenerate can detect them.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from georef.db.session import Base  # noqa: F401 — re-exported for convenience


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Country(TimestampMixin, Base):
    __tablename__ = "countries"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100))
    code: Mapped[str] = mapped_column(String(3), unique=True)

    states: Mapped[list["State"]] = relationship(back_populates="country")


class State(TimestampMixin, Base):
    __tablename__ = "states"
    __table_args__ = (UniqueConstraint("code", "country_id", name="uq_state_code_country"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100))
    code: Mapped[str] = mapped_column(String(5))
    country_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("countries.id"), index=True)

    country: Mapped["Country"] = relationship(back_populates="states")
    cities: Mapped[list["City"]] = relationship(back_populates="state")


class City(TimestampMixin, Base):
    __tablename__ = "cities"
    __table_args__ = (CheckConstraint("char_length(code) = 7", name="code_length"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100))
    code: Mapped[str] = mapped_column(String(7), unique=True)
    state_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("states.id"), index=True)

    state: Mapped["State"] = relationship(back_populates="cities")


class Address(TimestampMixin, Base):
    __tablename__ = "addresses"
    __table_args__ = (
        UniqueConstraint("address", "number", "zip_code", name="uq_address_location"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    address: Mapped[str] = mapped_column(String(200))
    number: Mapped[str] = mapped_column(String(20))
    zip_code: Mapped[str] = mapped_column(String(20))
    city_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("cities.id"), index=True)


class Vehicle(TimestampMixin, Base):
    __tablename__ = "vehicles"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    plate: Mapped[str] = mapped_column(String(20), unique=True)


class RouteStatus(TimestampMixin, Base):
    __tablename__ = "route_status"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    code: Mapped[str] = mapped_column(String(50), unique=True)
    description: Mapped[str] = mapped_column(String(200))


class Route(TimestampMixin, Base):
    __tablename__ = "routes"
    __table_args__ = (
        CheckConstraint("initial_lat >= -90 AND initial_lat <= 90", name="initial_lat_range"),
        CheckConstraint(
            "initial_long >= -180 AND initial_long <= 180", name="initial_long_range"
        ),
        CheckConstraint("final_lat >= -90 AND final_lat <= 90", name="final_lat_range"),
        CheckConstraint("final_long >= -180 AND final_long <= 180", name="final_long_range"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    initial_lat: Mapped[Decimal] = mapped_column(Numeric(9, 6))
    initial_long: Mapped[Decimal] = mapped_column(Numeric(9, 6))
    final_lat: Mapped[Decimal] = mapped_column(Numeric(9, 6))
    final_long: Mapped[Decimal] = mapped_column(Numeric(9, 6))
    initial_address_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("addresses.id"), index=True
    )
    final_address_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("addresses.id"), index=True
    )
    vehicle_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("vehicles.id"), index=True)
    status_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("route_status.id"), index=True)
