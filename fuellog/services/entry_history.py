"""
Acces a l'historique des pleins / Fill-up history access.
Requetes utilisees par le calcul des champs derives et les statistiques.
"""

from datetime import datetime
from functools import partial

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fuellog.models.fill_up_entry import FillLevel, FillUpEntry
from fuellog.models.vehicle import FuelType
from fuellog.services.derived_fields import PrecedingLookup


async def find_preceding_entry(
    db: AsyncSession,
    user_id: int,
    vehicle_id: int,
    tank_id: int | None,
    odometer_km: float,
) -> FillUpEntry | None:
    """Plein au plus grand odometre < odometer_km dans le perimetre / Nearest lower-odometer entry in scope."""
    query = select(FillUpEntry).where(
        FillUpEntry.user_id == user_id,
        FillUpEntry.vehicle_id == vehicle_id,
        FillUpEntry.odometer_km < odometer_km,
    )
    # Sans reservoir = perimetre propre / No tank is its own scope
    if tank_id is None:
        query = query.where(FillUpEntry.tank_id.is_(None))
    else:
        query = query.where(FillUpEntry.tank_id == tank_id)
    result = await db.execute(query.order_by(FillUpEntry.odometer_km.desc()).limit(1))
    return result.scalar_one_or_none()


def preceding_lookup(db: AsyncSession) -> PrecedingLookup:
    """Lier la recherche a une session / Bind the lookup to a session."""
    return partial(find_preceding_entry, db)


def entries_query(
    user_id: int,
    vehicle_id: int | None = None,
    tank_id: int | None = None,
    fuel_type: FuelType | None = None,
    fill_level: FillLevel | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
):
    """Requete filtree, sans tri / Filtered query, unordered."""
    query = select(FillUpEntry).where(FillUpEntry.user_id == user_id)
    if vehicle_id is not None:
        query = query.where(FillUpEntry.vehicle_id == vehicle_id)
    if tank_id is not None:
        query = query.where(FillUpEntry.tank_id == tank_id)
    if fuel_type is not None:
        query = query.where(FillUpEntry.fuel_type == fuel_type)
    if fill_level is not None:
        query = query.where(FillUpEntry.fill_level == fill_level)
    if date_from is not None:
        query = query.where(FillUpEntry.entry_date >= date_from)
    if date_to is not None:
        query = query.where(FillUpEntry.entry_date <= date_to)
    return query


async def list_chronological(db: AsyncSession, user_id: int, **filters) -> list[FillUpEntry]:
    """Pleins tries par date croissante / Entries sorted by date ascending.

    Ordre attendu par FuelStatsService.aggregate / Order expected by FuelStatsService.aggregate.
    """
    query = entries_query(user_id, **filters).order_by(
        FillUpEntry.entry_date.asc(), FillUpEntry.odometer_km.asc(), FillUpEntry.id.asc()
    )
    result = await db.execute(query)
    return list(result.scalars().all())
