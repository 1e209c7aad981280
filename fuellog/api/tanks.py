"""Routes reservoirs d'un vehicule / Vehicle tank profile routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fuellog.database import get_db
from fuellog.models.fill_up_entry import FillUpEntry
from fuellog.models.vehicle import TankProfile, Vehicle
from fuellog.schemas.vehicle import TankCreate, TankRead, TankUpdate
from fuellog.api.deps import get_owned_vehicle

router = APIRouter()


async def get_vehicle_tank(db: AsyncSession, vehicle: Vehicle, tank_id: int) -> TankProfile:
    """Reservoir du vehicule ou 404 / Vehicle's tank or 404."""
    result = await db.execute(
        select(TankProfile).where(TankProfile.id == tank_id, TankProfile.vehicle_id == vehicle.id)
    )
    tank = result.scalar_one_or_none()
    if tank is None:
        raise HTTPException(status_code=404, detail="Tank not found")
    return tank


@router.get("/", response_model=list[TankRead])
async def list_tanks(
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(TankProfile).where(TankProfile.vehicle_id == vehicle.id).order_by(TankProfile.id)
    )
    return result.scalars().all()


@router.post("/", response_model=TankRead, status_code=201)
async def create_tank(
    data: TankCreate,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    tank = TankProfile(vehicle_id=vehicle.id, **data.model_dump())
    db.add(tank)
    await db.flush()
    await db.refresh(tank)
    return tank


@router.put("/{tank_id}", response_model=TankRead)
async def update_tank(
    tank_id: int,
    data: TankUpdate,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    tank = await get_vehicle_tank(db, vehicle, tank_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(tank, key, value)
    await db.flush()
    await db.refresh(tank)
    return tank


@router.delete("/{tank_id}", status_code=204)
async def delete_tank(
    tank_id: int,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    """Supprimer un reservoir et ses pleins / Delete a tank and its entries."""
    tank = await get_vehicle_tank(db, vehicle, tank_id)
    await db.execute(delete(FillUpEntry).where(FillUpEntry.tank_id == tank.id))
    await db.delete(tank)
