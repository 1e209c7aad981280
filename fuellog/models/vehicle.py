"""Modeles Vehicule et reservoir / Vehicle and tank profile models.

Un vehicule peut avoir plusieurs reservoirs (ex. bi-carburation) ; les pleins
sont sequences par reservoir.
A vehicle may carry several tank profiles (e.g. dual-fuel); fill-ups are
sequenced per tank.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fuellog.database import Base


class FuelType(str, enum.Enum):
    """Type de carburant / Fuel type."""
    REGULAR = "REGULAR"
    PREMIUM = "PREMIUM"
    DIESEL = "DIESEL"
    E85 = "E85"
    OTHER = "OTHER"


class TransmissionType(str, enum.Enum):
    """Type de boite / Transmission type."""
    AUTOMATIC = "AUTOMATIC"
    MANUAL = "MANUAL"
    CVT = "CVT"
    DCT = "DCT"
    OTHER = "OTHER"


class Vehicle(Base):
    """Vehicule d'un utilisateur / User-owned vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    make: Mapped[str | None] = mapped_column(String(50))
    model: Mapped[str | None] = mapped_column(String(50))
    year: Mapped[int | None] = mapped_column(Integer)
    transmission_type: Mapped[TransmissionType | None] = mapped_column(Enum(TransmissionType))
    # Consommation constructeur / Manufacturer rating, only used for fleet health
    expected_mpg: Mapped[float | None] = mapped_column(Numeric(8, 3))
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relations
    user: Mapped["User"] = relationship(back_populates="vehicles")
    tanks: Mapped[list["TankProfile"]] = relationship(
        back_populates="vehicle", cascade="all, delete-orphan", lazy="selectin"
    )
    entries: Mapped[list["FillUpEntry"]] = relationship(
        back_populates="vehicle", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Vehicle {self.name} - user {self.user_id}>"


class TankProfile(Base):
    """Reservoir d'un vehicule / Vehicle tank profile."""
    __tablename__ = "tank_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    fuel_type: Mapped[FuelType] = mapped_column(Enum(FuelType), nullable=False)
    capacity_l: Mapped[float | None] = mapped_column(Numeric(8, 2))
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="tanks")
    entries: Mapped[list["FillUpEntry"]] = relationship(back_populates="tank", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<TankProfile {self.name} ({self.fuel_type.value}) - vehicle {self.vehicle_id}>"
