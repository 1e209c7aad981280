"""
Modeles SQLAlchemy / SQLAlchemy models.
Importer tous les modeles ici pour que Base.metadata les detecte.
Import all models here so Base.metadata can detect them.
"""

from fuellog.models.user import User, DistanceUnit, VolumeUnit, EconomyUnit
from fuellog.models.vehicle import Vehicle, TankProfile, FuelType, TransmissionType
from fuellog.models.fill_up_entry import FillUpEntry, FillLevel, SourceType
from fuellog.models.budget import MonthlyBudget

__all__ = [
    "User",
    "DistanceUnit",
    "VolumeUnit",
    "EconomyUnit",
    "Vehicle",
    "TankProfile",
    "FuelType",
    "TransmissionType",
    "FillUpEntry",
    "FillLevel",
    "SourceType",
    "MonthlyBudget",
]
