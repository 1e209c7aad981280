"""Routes Export des pleins / Fill-up export routes."""

import io

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fuellog.database import get_db
from fuellog.models.fill_up_entry import FillUpEntry
from fuellog.models.user import User
from fuellog.services.entry_history import entries_query
from fuellog.services.export_service import ENTRY_FIELDS, ExportService
from fuellog.api.deps import get_current_user

router = APIRouter()

MEDIA_TYPES = {
    "csv": "text/csv; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "json": "application/json",
}


@router.get("/entries")
async def export_entries(
    format: str = Query("csv", pattern="^(csv|xlsx|json)$"),
    vehicle_id: int | None = Query(None, alias="vehicleId"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Exporter les pleins en CSV, XLSX ou JSON / Export entries to CSV, XLSX or JSON."""
    query = (
        entries_query(user.id, vehicle_id=vehicle_id)
        .options(selectinload(FillUpEntry.vehicle))
        .order_by(FillUpEntry.entry_date.asc(), FillUpEntry.id.asc())
    )
    result = await db.execute(query)
    rows = [ExportService.entry_to_dict(e) for e in result.scalars().all()]
    fields = list(ENTRY_FIELDS)

    if format == "csv":
        content = ExportService.to_csv(rows, fields)
    elif format == "xlsx":
        content = ExportService.to_xlsx(rows, fields)
    else:
        content = ExportService.to_json(rows)

    return StreamingResponse(
        io.BytesIO(content),
        media_type=MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="fuel-entries.{format}"'},
    )
