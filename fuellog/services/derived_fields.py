"""
Service de calcul des champs derives / Derived-fields calculation service.

Calcule, pour un nouveau plein, le prix au litre, la distance depuis le plein
precedent, la consommation (L/100km et MPG, pleins complets uniquement) et le
cout au km.
For a new fill-up, computes price per liter, distance since the preceding
entry, economy (L/100km and MPG, full fills only) and cost per km.

Le plein precedent est celui du meme perimetre (utilisateur, vehicule,
reservoir ou "sans reservoir") ayant le plus grand odometre strictement
inferieur, pas le plus recent par date : une saisie historique tardive
devient ainsi la bonne reference.
The preceding entry is the one in the same scope with the largest odometer
strictly below the new one, not the most recent by date.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Awaitable, Callable

from fuellog.models.fill_up_entry import FillLevel
from fuellog.models.user import DistanceUnit, VolumeUnit
from fuellog.services.conversions import UnitConversionService

log = logging.getLogger(__name__)

# (user_id, vehicle_id, tank_id, odometer_km) -> plein precedent ou None
PrecedingLookup = Callable[[int, int, int | None, float], Awaitable[Any | None]]


class EntryValidationError(ValueError):
    """Saisie invalide, le plein n'est pas cree / Invalid input, entry is not created."""


def _require_finite(value: Any, label: str) -> float:
    # Decimal = valeur lue d'une colonne Numeric / value read from a Numeric column
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise EntryValidationError(f"Invalid {label}: a number is required")
    try:
        number = float(value)
    except ValueError:
        # Decimal("sNaN")
        raise EntryValidationError(f"Invalid {label}: must be a finite number")
    if not math.isfinite(number):
        raise EntryValidationError(f"Invalid {label}: must be a finite number")
    return number


@dataclass(frozen=True)
class MetricReading:
    """Releve deja en km / litres / Reading already in km and liters."""
    odometer_km: float
    fuel_volume_l: float

    def to_metric(self) -> "MetricReading":
        return MetricReading(
            odometer_km=_require_finite(self.odometer_km, "odometer"),
            fuel_volume_l=_require_finite(self.fuel_volume_l, "fuel volume"),
        )


@dataclass(frozen=True)
class LegacyUnitReading:
    """Releve avec unites explicites (ancien format) / Unit-tagged reading (legacy format)."""
    odometer: float
    odometer_unit: DistanceUnit
    fuel_volume: float
    fuel_unit: VolumeUnit

    def to_metric(self) -> MetricReading:
        odometer = _require_finite(self.odometer, "odometer")
        fuel_volume = _require_finite(self.fuel_volume, "fuel volume")
        try:
            odometer_km = UnitConversionService.to_km(odometer, self.odometer_unit)
            fuel_volume_l = UnitConversionService.to_liters(fuel_volume, self.fuel_unit)
        except ValueError as exc:
            raise EntryValidationError(f"Invalid unit: {exc}") from exc
        return MetricReading(odometer_km=odometer_km, fuel_volume_l=fuel_volume_l)


Reading = MetricReading | LegacyUnitReading


@dataclass(frozen=True)
class EntryInput:
    """Saisie brute d'un plein / Raw fill-up input."""
    reading: Reading
    total_cost: float
    fill_level: FillLevel = FillLevel.FULL


@dataclass(frozen=True)
class DerivedFields:
    """Champs derives prets a persister / Derived fields ready for persistence."""
    odometer_km: float
    fuel_volume_l: float
    price_per_liter: float
    distance_since_last_km: float | None = None
    economy_l_per_100km: float | None = None
    economy_mpg: float | None = None
    cost_per_km: float | None = None


class DerivedFieldsService:
    """Calcul des champs derives d'un plein / Fill-up derived fields calculation."""

    @staticmethod
    async def compute(
        user_id: int,
        vehicle_id: int,
        tank_id: int | None,
        entry: EntryInput,
        find_preceding: PrecedingLookup,
    ) -> DerivedFields:
        """
        Calculer les champs derives / Compute derived fields.

        Leve EntryValidationError si l'odometre, le volume ou le cout n'est pas
        un nombre fini, ou si le volume ou le cout est <= 0.
        Raises EntryValidationError on non-finite inputs or non-positive
        volume/cost. Errors from find_preceding propagate unchanged.
        """
        metric = entry.reading.to_metric()
        odometer_km = metric.odometer_km
        fuel_volume_l = metric.fuel_volume_l
        total_cost = _require_finite(entry.total_cost, "total cost")

        if fuel_volume_l <= 0 or total_cost <= 0:
            raise EntryValidationError("Fuel volume and total cost must be greater than zero")

        price_per_liter = total_cost / fuel_volume_l

        previous = await find_preceding(user_id, vehicle_id, tank_id, odometer_km)
        if previous is None:
            return DerivedFields(odometer_km, fuel_volume_l, price_per_liter)

        dist = odometer_km - float(previous.odometer_km)
        if dist <= 0:
            # Odometre duplique ou hors sequence / Duplicate or out-of-order odometer
            log.info(
                "Non-positive distance (%.1f km) for vehicle %s tank %s, derived fields left empty",
                dist, vehicle_id, tank_id,
            )
            return DerivedFields(odometer_km, fuel_volume_l, price_per_liter)

        economy_l_per_100km = None
        economy_mpg = None
        if FillLevel(entry.fill_level) is FillLevel.FULL:
            economy_l_per_100km = UnitConversionService.calculate_l_per_100km(dist, fuel_volume_l)
            economy_mpg = UnitConversionService.mpg_from_metric(dist, fuel_volume_l)

        return DerivedFields(
            odometer_km=odometer_km,
            fuel_volume_l=fuel_volume_l,
            price_per_liter=price_per_liter,
            distance_since_last_km=dist,
            economy_l_per_100km=economy_l_per_100km,
            economy_mpg=economy_mpg,
            cost_per_km=total_cost / dist,
        )
