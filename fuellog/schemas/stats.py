"""Schemas statistiques, budget et tableau de bord / Stats, budget and dashboard schemas."""

from pydantic import Field

from fuellog.schemas.common import CamelModel


class VehicleStatsRead(CamelModel):
    """Agregats d'un vehicule ou d'un reservoir / Vehicle or tank aggregates."""
    total_fuel_l: float = 0
    total_cost: float = 0
    total_distance_km: float = 0
    avg_economy_l_per_100km: float | None = Field(None, alias="avgEconomyLPer100Km")
    avg_economy_mpg: float | None = None
    avg_price_per_liter: float | None = None
    entry_count: int = 0


class FleetHealthRead(CamelModel):
    fleet_avg_mpg: float | None = None
    expected_avg_mpg: float | None = None
    health_score: float | None = None


class BudgetUpdate(CamelModel):
    amount: float = Field(gt=0)
    currency: str = Field("USD", min_length=3, max_length=3)


class BudgetRead(CamelModel):
    id: int
    user_id: int
    amount: float
    currency: str


class BudgetUsageRead(CamelModel):
    """Consommation du budget du mois / Current month budget usage."""
    budget: BudgetRead | None = None
    total_spent: float = 0
    percent_used: float | None = None
    entry_count: int = 0
