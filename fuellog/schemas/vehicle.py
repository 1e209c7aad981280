"""Schemas Vehicule et reservoir / Vehicle and tank profile schemas."""

from datetime import date, datetime

from pydantic import Field, field_validator

from fuellog.models.vehicle import FuelType, TransmissionType
from fuellog.schemas.common import CamelModel
from fuellog.schemas.stats import VehicleStatsRead


def _check_year(value: int | None) -> int | None:
    if value is not None and not 1900 <= value <= date.today().year + 1:
        raise ValueError("year out of range")
    return value


# --- Tank profiles ---

class TankCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    fuel_type: FuelType
    capacity_l: float | None = Field(None, gt=0)


class TankUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    fuel_type: FuelType | None = None
    capacity_l: float | None = Field(None, gt=0)


class TankRead(CamelModel):
    id: int
    vehicle_id: int
    name: str
    fuel_type: FuelType
    capacity_l: float | None = None


# --- Vehicles ---

class VehicleCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    make: str | None = Field(None, max_length=50)
    model: str | None = Field(None, max_length=50)
    year: int | None = None
    transmission_type: TransmissionType | None = None
    expected_mpg: float | None = Field(None, gt=0)

    check_year = field_validator("year")(_check_year)


class VehicleUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    make: str | None = Field(None, max_length=50)
    model: str | None = Field(None, max_length=50)
    year: int | None = None
    transmission_type: TransmissionType | None = None
    expected_mpg: float | None = Field(None, gt=0)

    check_year = field_validator("year")(_check_year)


class VehicleRead(CamelModel):
    id: int
    user_id: int
    name: str
    make: str | None = None
    model: str | None = None
    year: int | None = None
    transmission_type: TransmissionType | None = None
    expected_mpg: float | None = None
    tanks: list[TankRead] = []
    created_at: datetime | None = None


class VehicleWithStats(VehicleRead):
    """Vehicule avec ses agregats / Vehicle with its aggregates."""
    stats: VehicleStatsRead
