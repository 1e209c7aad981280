"""
Modele Utilisateur / User model.
Compte + preferences d'unites d'affichage / Account + display unit preferences.
"""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fuellog.database import Base


class DistanceUnit(str, enum.Enum):
    """Unite de distance / Distance unit."""
    KM = "KM"
    MILE = "MILE"


class VolumeUnit(str, enum.Enum):
    """Unite de volume / Volume unit."""
    LITER = "LITER"
    GALLON = "GALLON"


class EconomyUnit(str, enum.Enum):
    """Unite de consommation / Economy unit."""
    L_PER_100KM = "L_PER_100KM"
    MPG = "MPG"


class User(Base):
    """Utilisateur de l'application / Application user."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # --- Preferences ---
    default_distance_unit: Mapped[DistanceUnit] = mapped_column(
        Enum(DistanceUnit), default=DistanceUnit.KM
    )
    default_volume_unit: Mapped[VolumeUnit] = mapped_column(
        Enum(VolumeUnit), default=VolumeUnit.LITER
    )
    default_economy_unit: Mapped[EconomyUnit] = mapped_column(
        Enum(EconomyUnit), default=EconomyUnit.L_PER_100KM
    )
    default_currency: Mapped[str] = mapped_column(String(3), default="USD")

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    # Relations
    vehicles: Mapped[list["Vehicle"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    budget: Mapped["MonthlyBudget"] = relationship(
        back_populates="user", cascade="all, delete-orphan", uselist=False
    )

    def __repr__(self) -> str:
        return f"<User {self.email}>"
