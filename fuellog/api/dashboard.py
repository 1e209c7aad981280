"""
Route tableau de bord / Dashboard route.

Un seul appel : vehicules + stats, budget du mois, dernier plein par vehicule,
sante de la flotte (MPG reel vs constructeur).
Single call: vehicles + stats, monthly budget, last entry per vehicle, fleet
health (actual vs expected MPG).
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from fuellog.config import settings
from fuellog.database import get_db
from fuellog.models.user import User
from fuellog.schemas.entry import DashboardResponse, EntryRead
from fuellog.schemas.stats import FleetHealthRead
from fuellog.services.entry_history import list_chronological
from fuellog.services.fuel_stats import FuelStatsService
from fuellog.api.budget import current_budget_usage
from fuellog.api.deps import get_current_user
from fuellog.api.vehicles import vehicles_with_stats

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def dashboard(
    response: Response,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    vehicles = await vehicles_with_stats(db, user.id)
    entries = await list_chronological(db, user.id)

    # Dernier plein par vehicule (ordre chronologique) / Last entry per vehicle
    last_entries = {}
    for entry in entries:
        last_entries[entry.vehicle_id] = EntryRead.model_validate(entry)

    expected = [v.expected_mpg for v in vehicles if v.expected_mpg]
    health = FuelStatsService.fleet_health(entries, expected)

    response.headers["Cache-Control"] = (
        f"private, max-age={settings.DASHBOARD_CACHE_SECONDS}"
    )
    return DashboardResponse(
        vehicles=vehicles,
        budget_usage=await current_budget_usage(db, user.id),
        last_entries=last_entries,
        fleet_health=FleetHealthRead.model_validate(health),
    )
