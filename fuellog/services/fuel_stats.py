"""
Service de statistiques carburant / Fuel statistics service.
Agregats par vehicule ou flotte, score de sante flotte, consommation du budget.

Les pleins dont l'odometre, le volume ou le cout n'est pas un nombre fini
sont ignores (et journalises), jamais comptes comme zero.
Entries whose odometer, volume or cost is not a finite number are skipped
(and logged), never counted as zero.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Iterable

from fuellog.config import settings
from fuellog.models.fill_up_entry import FillLevel

log = logging.getLogger(__name__)


def as_finite(value: Any) -> float | None:
    """Nombre fini ou None (accepte Decimal, str numerique) / Finite float or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _mean(values: list[float]) -> float | None:
    return sum(values) / len(values) if values else None


@dataclass(frozen=True)
class VehicleStats:
    total_fuel_l: float = 0.0
    total_cost: float = 0.0
    total_distance_km: float = 0.0
    avg_economy_l_per_100km: float | None = None
    avg_economy_mpg: float | None = None
    avg_price_per_liter: float | None = None
    entry_count: int = 0
    skipped_count: int = 0


@dataclass(frozen=True)
class FleetHealth:
    fleet_avg_mpg: float | None = None
    expected_avg_mpg: float | None = None
    health_score: float | None = None


@dataclass(frozen=True)
class BudgetUsage:
    total_spent: float = 0.0
    percent_used: float | None = None
    entry_count: int = 0


class FuelStatsService:
    """Calcul des agregats carburant / Fuel aggregate calculation."""

    @staticmethod
    def valid_entries(entries: Iterable[Any]) -> tuple[list[Any], int]:
        """Separer les pleins exploitables / Split usable entries from corrupt ones."""
        kept = []
        skipped = 0
        for e in entries:
            bad = [
                name for name in ("odometer_km", "fuel_volume_l", "total_cost")
                if as_finite(getattr(e, name, None)) is None
            ]
            if bad:
                skipped += 1
                log.warning(
                    "Skipping fill-up entry %s in aggregate: non-finite %s",
                    getattr(e, "id", "?"), ", ".join(bad),
                )
                continue
            kept.append(e)
        return kept, skipped

    @staticmethod
    def aggregate(entries: Iterable[Any]) -> VehicleStats:
        """
        Agreger des pleins tries par date croissante / Aggregate entries sorted by date ascending.

        La distance totale vaut dernier odometre - premier odometre dans l'ordre
        fourni ; elle n'est pas fiable si l'appelant ne trie pas par date ou en
        cas de retour en arriere du compteur.
        Total distance is last minus first odometer in the given order; it is
        unreliable for unsorted input or odometer rollbacks.
        """
        valid, skipped = FuelStatsService.valid_entries(entries)
        if not valid:
            return VehicleStats(skipped_count=skipped)

        total_fuel_l = sum(float(e.fuel_volume_l) for e in valid)
        total_cost = sum(float(e.total_cost) for e in valid)
        total_distance_km = (
            float(valid[-1].odometer_km) - float(valid[0].odometer_km) if len(valid) > 1 else 0.0
        )

        full_fills = [e for e in valid if e.fill_level == FillLevel.FULL]
        l_per_100km = [v for v in (as_finite(e.economy_l_per_100km) for e in full_fills) if v is not None]
        mpg = [v for v in (as_finite(e.economy_mpg) for e in full_fills) if v is not None]

        return VehicleStats(
            total_fuel_l=total_fuel_l,
            total_cost=total_cost,
            total_distance_km=total_distance_km,
            avg_economy_l_per_100km=_mean(l_per_100km),
            avg_economy_mpg=_mean(mpg),
            avg_price_per_liter=total_cost / total_fuel_l if total_fuel_l > 0 else None,
            entry_count=len(valid),
            skipped_count=skipped,
        )

    @staticmethod
    def fleet_health(entries: Iterable[Any], expected_mpg_values: Iterable[Any]) -> FleetHealth:
        """
        Score de sante flotte / Fleet health score.
        MPG moyen reel / MPG constructeur moyen * 100, borne a [0, HEALTH_SCORE_CAP].
        """
        fleet_avg_mpg = FuelStatsService.aggregate(entries).avg_economy_mpg
        expected = [v for v in (as_finite(x) for x in expected_mpg_values) if v is not None and v > 0]
        expected_avg_mpg = _mean(expected)

        health_score = None
        if fleet_avg_mpg is not None and expected_avg_mpg is not None:
            ratio = (fleet_avg_mpg / expected_avg_mpg) * 100
            health_score = max(0.0, min(settings.HEALTH_SCORE_CAP, ratio))

        return FleetHealth(
            fleet_avg_mpg=fleet_avg_mpg,
            expected_avg_mpg=expected_avg_mpg,
            health_score=health_score,
        )

    @staticmethod
    def budget_usage(entries: Iterable[Any], budget_amount: Any, today: date | None = None) -> BudgetUsage:
        """
        Depenses du mois courant (UTC par defaut) vs budget / Current month spend (UTC by default) vs budget.
        percent_used n'est pas borne (> 100 si depassement) / percent_used is unbounded.
        """
        today = today or datetime.now(timezone.utc).date()
        total_spent = 0.0
        count = 0
        for e in entries:
            entry_date = getattr(e, "entry_date", None)
            if entry_date is None or (entry_date.year, entry_date.month) != (today.year, today.month):
                continue
            cost = as_finite(e.total_cost)
            if cost is None:
                log.warning("Skipping fill-up entry %s in budget usage: non-finite total_cost", getattr(e, "id", "?"))
                continue
            total_spent += cost
            count += 1

        amount = as_finite(budget_amount)
        percent_used = (total_spent / amount) * 100 if amount is not None and amount > 0 else None
        return BudgetUsage(total_spent=total_spent, percent_used=percent_used, entry_count=count)
