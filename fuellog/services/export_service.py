"""
Service d'export des pleins / Fill-up export service.
Genere des fichiers CSV, XLSX et JSON a partir des pleins d'un utilisateur.
"""

import csv
import enum
import io
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font

# Colonnes exportees (noms JSON) -> attribut du modele / Exported columns -> model attribute
ENTRY_FIELDS: dict[str, str] = {
    "id": "id",
    "vehicleId": "vehicle_id",
    "vehicleName": "vehicle_name",
    "tankId": "tank_id",
    "entryDate": "entry_date",
    "odometerKm": "odometer_km",
    "fuelVolumeL": "fuel_volume_l",
    "totalCost": "total_cost",
    "currency": "currency",
    "pricePerLiter": "price_per_liter",
    "fuelType": "fuel_type",
    "fillLevel": "fill_level",
    "sourceType": "source_type",
    "distanceSinceLastKm": "distance_since_last_km",
    "economyLPer100Km": "economy_l_per_100km",
    "economyMpg": "economy_mpg",
    "costPerKm": "cost_per_km",
    "location": "location",
    "notes": "notes",
}


class ExportService:
    """Export de pleins vers CSV/XLSX/JSON / Fill-up export to CSV/XLSX/JSON."""

    @staticmethod
    def _plain(val: Any) -> Any:
        if isinstance(val, enum.Enum):
            return val.value
        if isinstance(val, Decimal):
            return float(val)
        if isinstance(val, (datetime, date)):
            return val.isoformat()
        return val

    @staticmethod
    def entry_to_dict(entry: Any) -> dict[str, Any]:
        """Extraire les colonnes d'export d'un plein / Extract export columns from an entry."""
        row = {}
        for column, attr in ENTRY_FIELDS.items():
            if attr == "vehicle_name":
                vehicle = entry.__dict__.get("vehicle")
                val = vehicle.name if vehicle is not None else None
            else:
                val = getattr(entry, attr, None)
            row[column] = ExportService._plain(val)
        return row

    @staticmethod
    def to_csv(rows: list[dict], fields: list[str]) -> bytes:
        """Generer un CSV UTF-8 BOM avec separateur ';' / Generate UTF-8 BOM CSV with ';' separator."""
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=fields, delimiter=";", extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({f: "" if row.get(f) is None else row.get(f) for f in fields})
        return ("\ufeff" + output.getvalue()).encode("utf-8")

    @staticmethod
    def to_xlsx(rows: list[dict], fields: list[str], sheet_name: str = "Entries") -> bytes:
        """Generer un fichier Excel / Generate an Excel file."""
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        # En-tetes / Headers
        for col_idx, field in enumerate(fields, 1):
            cell = ws.cell(row=1, column=col_idx, value=field)
            cell.font = Font(bold=True)

        # Donnees / Data rows
        for row_idx, row in enumerate(rows, 2):
            for col_idx, field in enumerate(fields, 1):
                ws.cell(row=row_idx, column=col_idx, value=row.get(field))

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()

    @staticmethod
    def to_json(rows: list[dict]) -> bytes:
        return json.dumps({"entries": rows, "count": len(rows)}, ensure_ascii=False).encode("utf-8")
