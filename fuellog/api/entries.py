"""Routes pleins de carburant / Fill-up entry routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fuellog.config import settings
from fuellog.database import get_db
from fuellog.models.fill_up_entry import FillLevel, FillUpEntry
from fuellog.models.vehicle import FuelType, Vehicle
from fuellog.schemas.entry import EntryCreate, EntryListResponse, EntryRead
from fuellog.services.derived_fields import DerivedFieldsService, EntryValidationError
from fuellog.services.entry_history import entries_query, preceding_lookup
from fuellog.api.deps import get_owned_vehicle
from fuellog.api.tanks import get_vehicle_tank

logger = logging.getLogger(__name__)

router = APIRouter()


def _naive_utc(value: datetime | None) -> datetime:
    """Date stockee en UTC sans fuseau / Stored as naive UTC."""
    if value is None:
        return datetime.now(timezone.utc).replace(tzinfo=None)
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


async def get_vehicle_entry(db: AsyncSession, vehicle: Vehicle, entry_id: int) -> FillUpEntry:
    result = await db.execute(
        select(FillUpEntry).where(FillUpEntry.id == entry_id, FillUpEntry.vehicle_id == vehicle.id)
    )
    entry = result.scalar_one_or_none()
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@router.get("/", response_model=EntryListResponse)
async def list_entries(
    tank_id: int | None = Query(None, alias="tankId"),
    fuel_type: FuelType | None = Query(None, alias="fuelType"),
    fill_level: FillLevel | None = Query(None, alias="fillLevel"),
    date_from: datetime | None = Query(None, alias="from"),
    date_to: datetime | None = Query(None, alias="to"),
    limit: int = Query(50, ge=1, le=settings.ENTRY_PAGE_LIMIT_MAX),
    offset: int = Query(0, ge=0),
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    """Lister les pleins, plus recents d'abord / List entries, most recent first."""
    query = entries_query(
        vehicle.user_id,
        vehicle_id=vehicle.id,
        tank_id=tank_id,
        fuel_type=fuel_type,
        fill_level=fill_level,
        date_from=date_from,
        date_to=date_to,
    )
    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar_one()
    result = await db.execute(
        query.order_by(FillUpEntry.entry_date.desc(), FillUpEntry.id.desc()).limit(limit).offset(offset)
    )
    return {"entries": result.scalars().all(), "total": total, "limit": limit, "offset": offset}


@router.post("/", response_model=EntryRead, status_code=201)
async def create_entry(
    data: EntryCreate,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    """
    Creer un plein et calculer ses champs derives / Create an entry and compute its derived fields.
    Saisie invalide (non finie, volume ou cout <= 0) -> 400.
    """
    tank_id = data.tank_profile_id
    if tank_id is not None:
        await get_vehicle_tank(db, vehicle, tank_id)

    try:
        derived = await DerivedFieldsService.compute(
            vehicle.user_id, vehicle.id, tank_id, data.to_entry_input(), preceding_lookup(db)
        )
    except EntryValidationError as exc:
        logger.info("Rejected entry for vehicle %s: %s", vehicle.id, exc)
        raise HTTPException(status_code=400, detail=str(exc))

    entry = FillUpEntry(
        user_id=vehicle.user_id,
        vehicle_id=vehicle.id,
        tank_id=tank_id,
        entry_date=_naive_utc(data.entry_date),
        odometer_km=derived.odometer_km,
        fuel_volume_l=derived.fuel_volume_l,
        total_cost=data.total_cost,
        currency=(data.currency or settings.DEFAULT_CURRENCY).upper(),
        fuel_type=data.fuel_type,
        fill_level=data.fill_level,
        source_type=data.source_type,
        image_url=data.image_url or None,
        ai_confidence=data.ai_confidence,
        location=data.location,
        notes=data.notes,
        price_per_liter=derived.price_per_liter,
        distance_since_last_km=derived.distance_since_last_km,
        economy_l_per_100km=derived.economy_l_per_100km,
        economy_mpg=derived.economy_mpg,
        cost_per_km=derived.cost_per_km,
    )
    db.add(entry)
    await db.flush()
    await db.refresh(entry)
    logger.info(
        "Entry %s created for vehicle %s at %.1f km (L/100km=%s)",
        entry.id, vehicle.id, derived.odometer_km, derived.economy_l_per_100km,
    )
    return entry


@router.get("/{entry_id}", response_model=EntryRead)
async def get_entry(
    entry_id: int,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    return await get_vehicle_entry(db, vehicle, entry_id)


@router.delete("/{entry_id}", status_code=204)
async def delete_entry(
    entry_id: int,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: AsyncSession = Depends(get_db),
):
    """Supprimer un plein ; les suivants ne sont pas recalcules / Delete an entry; later ones are not recomputed."""
    entry = await get_vehicle_entry(db, vehicle, entry_id)
    await db.delete(entry)
