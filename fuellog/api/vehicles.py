"""Routes Vehicules / Vehicle API routes."""

from collections import defaultdict

from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fuellog.database import get_db
from fuellog.models.fill_up_entry import FillUpEntry
from fuellog.models.user import User
from fuellog.models.vehicle import FuelType, Vehicle
from fuellog.schemas.stats import VehicleStatsRead
from fuellog.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate, VehicleWithStats
from fuellog.services.entry_history import list_chronological
from fuellog.services.fuel_stats import FuelStatsService
from fuellog.api.deps import get_current_user, get_owned_vehicle

router = APIRouter()


async def vehicles_with_stats(db: AsyncSession, user_id: int) -> list[VehicleWithStats]:
    """Vehicules + agregats, une seule requete de pleins / Vehicles + aggregates, single entries query."""
    result = await db.execute(
        select(Vehicle).where(Vehicle.user_id == user_id).order_by(Vehicle.created_at.desc(), Vehicle.id.desc())
    )
    vehicles = result.scalars().all()

    by_vehicle = defaultdict(list)
    for entry in await list_chronological(db, user_id):
        by_vehicle[entry.vehicle_id].append(entry)

    items = []
    for v in vehicles:
        stats = FuelStatsService.aggregate(by_vehicle.get(v.id, []))
        item = VehicleWithStats.model_validate(
            {**VehicleRead.model_validate(v).model_dump(), "stats": VehicleStatsRead.model_validate(stats)}
        )
        items.append(item)
    return items


@router.get("/", response_model=list[VehicleWithStats])
async def list_vehicles(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Lister les vehicules avec statistiques / List vehicles with stats."""
    return await vehicles_with_stats(db, user.id)


@router.post("/", response_model=VehicleRead, status_code=201)
async def create_vehicle(
    data: VehicleCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Creer un vehicule / Create vehicle."""
    vehicle = Vehicle(user_id=user.id, **data.model_dump())
    db.add(vehicle)
    await db.flush()
    await db.refresh(vehicle)
    return vehicle


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(vehicle: Vehicle = Depends(get_owned_vehicle)):
    """Voir un vehicule / Get vehicle detail."""
    return vehicle


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(
    data: VehicleUpdate,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    """Modifier un vehicule / Update vehicle."""
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(vehicle, key, value)
    await db.flush()
    await db.refresh(vehicle)
    return vehicle


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    """Supprimer un vehicule et ses pleins / Delete vehicle and its entries."""
    await db.execute(delete(FillUpEntry).where(FillUpEntry.vehicle_id == vehicle.id))
    await db.delete(vehicle)


@router.get("/{vehicle_id}/stats", response_model=VehicleStatsRead)
async def vehicle_stats(
    tank_id: int | None = Query(None, alias="tankId"),
    fuel_type: FuelType | None = Query(None, alias="fuelType"),
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    """Statistiques carburant d'un vehicule ou reservoir / Fuel stats for a vehicle or tank."""
    entries = await list_chronological(
        db, vehicle.user_id, vehicle_id=vehicle.id, tank_id=tank_id, fuel_type=fuel_type
    )
    return FuelStatsService.aggregate(entries)
