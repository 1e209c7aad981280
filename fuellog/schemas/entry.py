"""Schemas pleins de carburant / Fill-up entry schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from fuellog.models.fill_up_entry import FillLevel, SourceType
from fuellog.models.user import DistanceUnit, VolumeUnit
from fuellog.models.vehicle import FuelType
from fuellog.schemas.common import CamelModel
from fuellog.schemas.stats import BudgetUsageRead, FleetHealthRead
from fuellog.schemas.vehicle import VehicleWithStats
from fuellog.services.derived_fields import (
    EntryInput,
    EntryValidationError,
    LegacyUnitReading,
    MetricReading,
)

# Valeurs du formulaire -> enum stocke / Form values -> stored enum
FUEL_TYPE_ALIASES = {"GASOLINE": FuelType.REGULAR, "ELECTRIC": FuelType.OTHER}


class EntryCreate(CamelModel):
    """
    Creation d'un plein / Fill-up creation.

    Releve au format metrique (odometerKm + fuelVolumeL) ou ancien format
    avec unites (odometer + odometerUnit, fuelVolume + fuelUnit).
    """
    tank_profile_id: int | None = None
    entry_date: datetime | None = None

    odometer_km: float | None = None
    fuel_volume_l: float | None = None
    odometer: float | None = None
    odometer_unit: DistanceUnit | None = None
    fuel_volume: float | None = None
    fuel_unit: VolumeUnit | None = None

    total_cost: float | None = None
    currency: str | None = Field(None, min_length=3, max_length=3)
    fuel_type: FuelType
    fill_level: FillLevel = FillLevel.FULL
    source_type: SourceType = SourceType.MANUAL
    image_url: str | None = Field(None, max_length=500)
    ai_confidence: int | None = Field(None, ge=0, le=100)
    location: str | None = Field(None, max_length=200)
    notes: str | None = None

    @field_validator("fuel_type", mode="before")
    @classmethod
    def map_fuel_type_alias(cls, value):
        if isinstance(value, str):
            return FUEL_TYPE_ALIASES.get(value.upper(), value.upper())
        return value

    def to_entry_input(self) -> EntryInput:
        """Resoudre le releve en union metrique / ancien format / Resolve the reading union."""
        if self.odometer_km is not None and self.fuel_volume_l is not None:
            reading = MetricReading(self.odometer_km, self.fuel_volume_l)
        elif None not in (self.odometer, self.odometer_unit, self.fuel_volume, self.fuel_unit):
            reading = LegacyUnitReading(self.odometer, self.odometer_unit, self.fuel_volume, self.fuel_unit)
        else:
            raise EntryValidationError(
                "Invalid reading: provide odometerKm and fuelVolumeL, "
                "or odometer, odometerUnit, fuelVolume and fuelUnit"
            )
        return EntryInput(reading=reading, total_cost=self.total_cost, fill_level=self.fill_level)


class EntryRead(CamelModel):
    id: int
    user_id: int
    vehicle_id: int
    tank_id: int | None = None
    entry_date: datetime
    odometer_km: float
    fuel_volume_l: float
    total_cost: float
    currency: str
    fuel_type: FuelType
    fill_level: FillLevel
    source_type: SourceType
    image_url: str | None = None
    ai_confidence: int | None = None
    location: str | None = None
    notes: str | None = None
    price_per_liter: float | None = None
    distance_since_last_km: float | None = None
    economy_l_per_100km: float | None = Field(None, alias="economyLPer100Km")
    economy_mpg: float | None = None
    cost_per_km: float | None = None
    created_at: datetime | None = None


class EntryListResponse(CamelModel):
    entries: list[EntryRead]
    total: int
    limit: int
    offset: int


class DashboardResponse(CamelModel):
    """Tableau de bord consolide / Consolidated dashboard."""
    vehicles: list[VehicleWithStats] = []
    budget_usage: BudgetUsageRead | None = None
    last_entries: dict[int, EntryRead] = {}
    fleet_health: FleetHealthRead
