"""Modele plein de carburant / Fuel fill-up entry model.

Les champs derives sont calcules une seule fois a la creation
(voir services/derived_fields.py) et ne sont jamais recalcules.
Derived fields are computed once at creation and never recomputed.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Float, ForeignKey, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fuellog.database import Base
from fuellog.models.vehicle import FuelType


class FillLevel(str, enum.Enum):
    """Niveau de remplissage / Fill level."""
    FULL = "FULL"
    PARTIAL = "PARTIAL"


class SourceType(str, enum.Enum):
    """Origine de la saisie / Entry source."""
    MANUAL = "MANUAL"
    PHOTO_AI = "PHOTO_AI"
    API = "API"


class FillUpEntry(Base):
    """Plein de carburant / Fill-up entry."""
    __tablename__ = "fill_up_entries"
    __table_args__ = (
        # Recherche du plein precedent / Preceding-entry lookup
        Index("ix_fill_up_scope_odometer", "user_id", "vehicle_id", "tank_id", "odometer_km"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False)
    tank_id: Mapped[int | None] = mapped_column(ForeignKey("tank_profiles.id", ondelete="CASCADE"))

    # --- Mesures / Measured ---
    entry_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    odometer_km: Mapped[float] = mapped_column(Numeric(12, 3), nullable=False)
    fuel_volume_l: Mapped[float] = mapped_column(Numeric(10, 3), nullable=False)
    total_cost: Mapped[float] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    fuel_type: Mapped[FuelType] = mapped_column(Enum(FuelType), nullable=False)
    fill_level: Mapped[FillLevel] = mapped_column(Enum(FillLevel), default=FillLevel.FULL)
    source_type: Mapped[SourceType] = mapped_column(Enum(SourceType), default=SourceType.MANUAL)
    image_url: Mapped[str | None] = mapped_column(String(500))
    ai_confidence: Mapped[int | None] = mapped_column(Integer)  # 0-100, PHOTO_AI only
    location: Mapped[str | None] = mapped_column(String(200))
    notes: Mapped[str | None] = mapped_column(Text)

    # --- Champs derives / Derived (ratios en Float, sans borne de precision) ---
    price_per_liter: Mapped[float | None] = mapped_column(Float)
    distance_since_last_km: Mapped[float | None] = mapped_column(Numeric(12, 3))
    economy_l_per_100km: Mapped[float | None] = mapped_column(Float)
    economy_mpg: Mapped[float | None] = mapped_column(Float)
    cost_per_km: Mapped[float | None] = mapped_column(Float)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="entries")
    tank: Mapped["TankProfile"] = relationship(back_populates="entries", lazy="selectin")

    def __repr__(self) -> str:
        return f"<FillUpEntry {self.odometer_km}km - {self.fuel_volume_l}L - vehicle {self.vehicle_id}>"
