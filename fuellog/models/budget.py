"""Modele budget mensuel / Monthly budget model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fuellog.database import Base


class MonthlyBudget(Base):
    """Budget carburant mensuel, un par utilisateur / Monthly fuel budget, one per user."""
    __tablename__ = "monthly_budgets"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relations
    user: Mapped["User"] = relationship(back_populates="budget")

    def __repr__(self) -> str:
        return f"<MonthlyBudget {self.amount} {self.currency} - user {self.user_id}>"
