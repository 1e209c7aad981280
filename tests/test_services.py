"""Tests des services / Service tests."""

import io
import math
from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from openpyxl import load_workbook

from fuellog.models.fill_up_entry import FillLevel
from fuellog.models.user import DistanceUnit, VolumeUnit
from fuellog.services.conversions import L_PER_100KM_MPG_FACTOR, UnitConversionService
from fuellog.services.derived_fields import (
    DerivedFieldsService,
    EntryInput,
    EntryValidationError,
    LegacyUnitReading,
    MetricReading,
)
from fuellog.services.export_service import ENTRY_FIELDS, ExportService
from fuellog.services import fuel_stats
from fuellog.services.fuel_stats import FuelStatsService, as_finite


def lookup(previous_odometer=None, calls=None):
    async def find(user_id, vehicle_id, tank_id, odometer_km):
        if calls is not None:
            calls.append((user_id, vehicle_id, tank_id, odometer_km))
        if previous_odometer is None:
            return None
        return SimpleNamespace(odometer_km=previous_odometer)
    return find


def entry(odometer, volume, cost, fill=FillLevel.FULL, l100=None, mpg=None, when=None, id=None):
    return SimpleNamespace(
        id=id, odometer_km=odometer, fuel_volume_l=volume, total_cost=cost, fill_level=fill,
        economy_l_per_100km=l100, economy_mpg=mpg, entry_date=when,
    )


# --- Conversions ---

def test_to_km():
    assert UnitConversionService.to_km(100, DistanceUnit.KM) == 100
    assert UnitConversionService.to_km(1, "MILE") == pytest.approx(1.609344)


def test_to_liters():
    assert UnitConversionService.to_liters(10, VolumeUnit.LITER) == 10
    assert UnitConversionService.to_liters(1, VolumeUnit.GALLON) == pytest.approx(3.785411784)


def test_unknown_unit():
    with pytest.raises(ValueError):
        UnitConversionService.to_km(1, "FURLONG")


def test_l_per_100km():
    assert UnitConversionService.calculate_l_per_100km(500, 40) == pytest.approx(8.0)


def test_mpg_matches_l_per_100km():
    for dist, vol in [(500, 40), (612.3, 35.5), (80, 12)]:
        l100 = UnitConversionService.calculate_l_per_100km(dist, vol)
        assert UnitConversionService.mpg_from_metric(dist, vol) == pytest.approx(L_PER_100KM_MPG_FACTOR / l100)
    assert L_PER_100KM_MPG_FACTOR == pytest.approx(235.214583)


def test_inverse_helpers():
    assert UnitConversionService.km_to_miles(1.609344) == pytest.approx(1)
    assert UnitConversionService.liters_to_gallons(3.785411784) == pytest.approx(1)


# --- Derived fields ---

async def test_first_entry_has_no_distance():
    derived = await DerivedFieldsService.compute(
        1, 2, None, EntryInput(MetricReading(10000, 40), 60), lookup()
    )
    assert derived.price_per_liter == pytest.approx(1.5)
    assert derived.distance_since_last_km is None
    assert derived.economy_l_per_100km is None
    assert derived.economy_mpg is None
    assert derived.cost_per_km is None


async def test_full_fill_after_predecessor():
    derived = await DerivedFieldsService.compute(
        1, 2, None, EntryInput(MetricReading(10500, 40), 60, FillLevel.FULL), lookup(10000)
    )
    assert derived.distance_since_last_km == pytest.approx(500)
    assert derived.economy_l_per_100km == pytest.approx(8.0)
    assert derived.economy_mpg == pytest.approx(29.4, abs=0.01)
    assert derived.cost_per_km == pytest.approx(60 / 500)


async def test_partial_fill_has_no_economy():
    derived = await DerivedFieldsService.compute(
        1, 2, None, EntryInput(MetricReading(10500, 40), 60, FillLevel.PARTIAL), lookup(10000)
    )
    assert derived.distance_since_last_km == pytest.approx(500)
    assert derived.economy_l_per_100km is None
    assert derived.economy_mpg is None
    assert derived.cost_per_km == pytest.approx(0.12)


async def test_non_positive_distance_clears_fields():
    for previous in (10000, 9000):
        derived = await DerivedFieldsService.compute(
            1, 2, None, EntryInput(MetricReading(9000, 40), 60), lookup(previous)
        )
        assert derived.distance_since_last_km is None
        assert derived.economy_l_per_100km is None
        assert derived.economy_mpg is None
        assert derived.cost_per_km is None
        assert derived.price_per_liter == pytest.approx(1.5)


async def test_predecessor_decimal_odometer():
    derived = await DerivedFieldsService.compute(
        1, 2, 5, EntryInput(MetricReading(10500, 40), 60), lookup(Decimal("10000.000"))
    )
    assert derived.distance_since_last_km == pytest.approx(500)


async def test_decimal_inputs_are_accepted():
    derived = await DerivedFieldsService.compute(
        1, 2, None,
        EntryInput(MetricReading(Decimal("10500"), Decimal("40")), Decimal("60")),
        lookup(Decimal("10000.000")),
    )
    assert derived.odometer_km == pytest.approx(10500)
    assert derived.price_per_liter == pytest.approx(1.5)
    assert derived.economy_l_per_100km == pytest.approx(8.0)
    assert derived.cost_per_km == pytest.approx(0.12)


@pytest.mark.parametrize("bad", [Decimal("NaN"), Decimal("sNaN"), Decimal("Infinity")])
async def test_non_finite_decimal_rejected(bad):
    with pytest.raises(EntryValidationError, match="finite"):
        await DerivedFieldsService.compute(1, 2, None, EntryInput(MetricReading(1000, 40), bad), lookup())


async def test_lookup_receives_scope_and_metric_odometer():
    calls = []
    reading = LegacyUnitReading(100, DistanceUnit.MILE, 10, VolumeUnit.GALLON)
    derived = await DerivedFieldsService.compute(3, 4, None, EntryInput(reading, 50), lookup(None, calls))
    assert calls == [(3, 4, None, pytest.approx(160.9344))]
    assert derived.odometer_km == pytest.approx(160.9344)
    assert derived.fuel_volume_l == pytest.approx(37.85411784)


@pytest.mark.parametrize("volume,cost", [(0, 60), (40, 0), (-5, 60), (40, -1)])
async def test_rejects_non_positive_volume_or_cost(volume, cost):
    with pytest.raises(EntryValidationError, match="greater than zero"):
        await DerivedFieldsService.compute(1, 2, None, EntryInput(MetricReading(1000, volume), cost), lookup())


@pytest.mark.parametrize("reading,cost", [
    (MetricReading(math.nan, 40), 60),
    (MetricReading(1000, math.inf), 60),
    (MetricReading(1000, 40), math.nan),
    (MetricReading(1000, 40), None),
    (LegacyUnitReading(None, DistanceUnit.KM, 40, VolumeUnit.LITER), 60),
])
async def test_rejects_non_finite_input(reading, cost):
    with pytest.raises(EntryValidationError):
        await DerivedFieldsService.compute(1, 2, None, EntryInput(reading, cost), lookup())


async def test_lookup_not_called_on_invalid_input():
    calls = []
    with pytest.raises(EntryValidationError):
        await DerivedFieldsService.compute(1, 2, None, EntryInput(MetricReading(1000, 0), 10), lookup(None, calls))
    assert calls == []


async def test_lookup_errors_propagate():
    async def broken(*args):
        raise RuntimeError("db down")

    with pytest.raises(RuntimeError, match="db down"):
        await DerivedFieldsService.compute(1, 2, None, EntryInput(MetricReading(1000, 40), 60), broken)


# --- Aggregate stats ---

def test_aggregate_empty():
    stats = FuelStatsService.aggregate([])
    assert stats.total_fuel_l == 0
    assert stats.total_cost == 0
    assert stats.total_distance_km == 0
    assert stats.avg_economy_l_per_100km is None
    assert stats.avg_economy_mpg is None
    assert stats.avg_price_per_liter is None
    assert stats.entry_count == 0


def test_aggregate_totals():
    stats = FuelStatsService.aggregate([
        entry(10000, 40, 60),
        entry(10500, 35, 50, l100=7.0, mpg=33.6),
        entry(11100, 45, 65, l100=7.5, mpg=31.4),
    ])
    assert stats.total_fuel_l == pytest.approx(120)
    assert stats.total_cost == pytest.approx(175)
    assert stats.avg_price_per_liter == pytest.approx(175 / 120)
    assert stats.avg_price_per_liter == pytest.approx(1.4583, abs=1e-4)
    assert stats.total_distance_km == pytest.approx(1100)
    assert stats.avg_economy_l_per_100km == pytest.approx(7.25)
    assert stats.avg_economy_mpg == pytest.approx(32.5)
    assert stats.entry_count == 3


def test_aggregate_single_entry_has_no_distance():
    assert FuelStatsService.aggregate([entry(10000, 40, 60)]).total_distance_km == 0


def test_aggregate_ignores_partial_economy():
    stats = FuelStatsService.aggregate([
        entry(1000, 40, 60, l100=8.0, mpg=29.4),
        entry(1500, 10, 15, fill=FillLevel.PARTIAL, l100=2.0, mpg=117.6),
    ])
    assert stats.avg_economy_l_per_100km == pytest.approx(8.0)
    assert stats.avg_economy_mpg == pytest.approx(29.4)


def test_aggregate_independent_economy_filters():
    stats = FuelStatsService.aggregate([
        entry(1000, 40, 60, l100=8.0, mpg=None),
        entry(1500, 40, 60, l100=None, mpg=30.0),
    ])
    assert stats.avg_economy_l_per_100km == pytest.approx(8.0)
    assert stats.avg_economy_mpg == pytest.approx(30.0)


def test_aggregate_skips_non_finite(caplog):
    stats = FuelStatsService.aggregate([
        entry(10000, 40, 60, id=1),
        entry(10200, 30, math.nan, id=2),
        entry(10500, 40, 60, id=3),
        entry(None, 40, 60, id=4),
    ])
    assert stats.entry_count == 2
    assert stats.skipped_count == 2
    assert stats.total_cost == pytest.approx(120)
    assert stats.total_distance_km == pytest.approx(500)
    assert "non-finite total_cost" in caplog.text


def test_aggregate_accepts_decimal_columns():
    stats = FuelStatsService.aggregate([
        entry(Decimal("1000.000"), Decimal("40.000"), Decimal("60.00")),
        entry(Decimal("1500.000"), Decimal("40.000"), Decimal("60.00"), l100=Decimal("8.000")),
    ])
    assert stats.total_fuel_l == pytest.approx(80)
    assert stats.avg_economy_l_per_100km == pytest.approx(8.0)


def test_as_finite():
    assert as_finite(Decimal("1.5")) == 1.5
    assert as_finite("2") == 2.0
    assert as_finite(None) is None
    assert as_finite(math.inf) is None
    assert as_finite("abc") is None
    assert as_finite(True) is None


# --- Fleet health ---

def test_fleet_health():
    health = FuelStatsService.fleet_health(
        [entry(1000, 40, 60, mpg=27.0), entry(1500, 40, 60, mpg=33.0)], [30, None, 30]
    )
    assert health.fleet_avg_mpg == pytest.approx(30)
    assert health.expected_avg_mpg == pytest.approx(30)
    assert health.health_score == pytest.approx(100)


def test_fleet_health_is_capped():
    high = FuelStatsService.fleet_health([entry(1000, 40, 60, mpg=60.0)], [20])
    assert high.health_score == 120


def test_fleet_health_missing_side():
    no_expected = FuelStatsService.fleet_health([entry(1000, 40, 60, mpg=30.0)], [])
    assert no_expected.fleet_avg_mpg == pytest.approx(30)
    assert no_expected.expected_avg_mpg is None
    assert no_expected.health_score is None

    no_mpg = FuelStatsService.fleet_health([entry(1000, 40, 60)], [30])
    assert no_mpg.fleet_avg_mpg is None
    assert no_mpg.health_score is None


# --- Budget usage ---

def test_budget_usage_current_month_only():
    today = date(2026, 3, 15)
    entries = [
        entry(1000, 40, 60, when=datetime(2026, 3, 1, 8, 0)),
        entry(1500, 40, 90, when=datetime(2026, 3, 14, 18, 30)),
        entry(900, 40, 500, when=datetime(2026, 2, 28, 23, 0)),
        entry(800, 40, 500, when=datetime(2025, 3, 10)),
    ]
    usage = FuelStatsService.budget_usage(entries, Decimal("100.00"), today)
    assert usage.total_spent == pytest.approx(150)
    assert usage.percent_used == pytest.approx(150)
    assert usage.entry_count == 2


def test_budget_usage_defaults_to_utc_month(monkeypatch):
    seen = []

    class FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            seen.append(tz)
            return datetime(2026, 4, 1, 0, 30, tzinfo=timezone.utc)

    monkeypatch.setattr(fuel_stats, "datetime", FrozenDatetime)
    entries = [
        entry(1000, 40, 60, when=datetime(2026, 4, 1, 0, 10)),
        entry(900, 40, 500, when=datetime(2026, 3, 31, 23, 50)),
    ]
    usage = FuelStatsService.budget_usage(entries, 100)
    assert seen == [timezone.utc]
    assert usage.total_spent == pytest.approx(60)
    assert usage.entry_count == 1


def test_budget_usage_without_budget():
    usage = FuelStatsService.budget_usage([entry(1, 1, 10, when=datetime(2026, 3, 2))], None, date(2026, 3, 5))
    assert usage.total_spent == pytest.approx(10)
    assert usage.percent_used is None


# --- Export ---

def test_entry_to_dict():
    e = entry(1000, 40, Decimal("60.00"), when=datetime(2026, 1, 2, 3, 4))
    e.vehicle_id = 9
    row = ExportService.entry_to_dict(e)
    assert row["totalCost"] == 60.0
    assert row["fillLevel"] == "FULL"
    assert row["entryDate"] == "2026-01-02T03:04:00"
    assert row["vehicleName"] is None


def test_to_csv():
    rows = [{"id": 1, "odometerKm": 1000.0, "notes": None}]
    content = ExportService.to_csv(rows, ["id", "odometerKm", "notes"])
    text = content.decode("utf-8")
    assert text.startswith("\ufeff")
    lines = text.lstrip("\ufeff").splitlines()
    assert lines[0] == "id;odometerKm;notes"
    assert lines[1] == "1;1000.0;"


def test_to_xlsx():
    fields = list(ENTRY_FIELDS)
    content = ExportService.to_xlsx([{"id": 1, "odometerKm": 1000.0}], fields)
    ws = load_workbook(io.BytesIO(content)).active
    assert ws.cell(row=1, column=1).value == "id"
    assert ws.cell(row=2, column=1).value == 1
