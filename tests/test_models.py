"""Tests des modeles / Model tests."""

from sqlalchemy import Float

from fuellog.models.fill_up_entry import FillLevel, FillUpEntry, SourceType
from fuellog.models.user import DistanceUnit, EconomyUnit, User, VolumeUnit
from fuellog.models.vehicle import FuelType, TankProfile, TransmissionType, Vehicle


def test_vehicle_repr():
    v = Vehicle(id=1, user_id=7, name="Civic")
    assert "Civic" in repr(v)


def test_tank_repr():
    t = TankProfile(id=2, vehicle_id=1, name="LPG", fuel_type=FuelType.OTHER)
    assert "LPG" in repr(t)
    assert "OTHER" in repr(t)


def test_entry_and_user_repr():
    e = FillUpEntry(vehicle_id=3, odometer_km=12000, fuel_volume_l=40)
    assert "vehicle 3" in repr(e)
    assert "a@b.io" in repr(User(email="a@b.io"))


def test_enums():
    assert FillLevel.FULL.value == "FULL"
    assert FillLevel.PARTIAL == "PARTIAL"
    assert SourceType.PHOTO_AI.value == "PHOTO_AI"
    assert FuelType.E85.value == "E85"
    assert TransmissionType.CVT.value == "CVT"
    assert DistanceUnit("MILE") is DistanceUnit.MILE
    assert VolumeUnit.GALLON.value == "GALLON"
    assert EconomyUnit.L_PER_100KM.value == "L_PER_100KM"


def test_derived_ratio_columns_are_float():
    columns = FillUpEntry.__table__.c
    for name in ("price_per_liter", "economy_l_per_100km", "economy_mpg", "cost_per_km"):
        assert isinstance(columns[name].type, Float), name
