"""Routes budget mensuel / Monthly budget routes."""

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fuellog.database import get_db
from fuellog.models.budget import MonthlyBudget
from fuellog.models.user import User
from fuellog.schemas.stats import BudgetRead, BudgetUpdate, BudgetUsageRead
from fuellog.services.entry_history import list_chronological
from fuellog.services.fuel_stats import FuelStatsService
from fuellog.api.deps import get_current_user

router = APIRouter()


async def get_user_budget(db: AsyncSession, user_id: int) -> MonthlyBudget | None:
    result = await db.execute(select(MonthlyBudget).where(MonthlyBudget.user_id == user_id))
    return result.scalar_one_or_none()


async def current_budget_usage(db: AsyncSession, user_id: int, today: date | None = None) -> BudgetUsageRead | None:
    """Consommation du mois courant, None sans budget / Current month usage, None without a budget."""
    budget = await get_user_budget(db, user_id)
    if budget is None:
        return None
    today = today or datetime.now(timezone.utc).date()
    month_start = datetime(today.year, today.month, 1)
    entries = await list_chronological(db, user_id, date_from=month_start)
    usage = FuelStatsService.budget_usage(entries, budget.amount, today)
    return BudgetUsageRead(
        budget=BudgetRead.model_validate(budget),
        total_spent=usage.total_spent,
        percent_used=usage.percent_used,
        entry_count=usage.entry_count,
    )


@router.get("", response_model=BudgetRead | None)
async def get_budget(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Budget de l'utilisateur (null si absent) / User budget (null if unset)."""
    return await get_user_budget(db, user.id)


@router.put("", response_model=BudgetRead)
async def set_budget(
    data: BudgetUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Creer ou modifier le budget / Create or update the budget."""
    budget = await get_user_budget(db, user.id)
    if budget is None:
        budget = MonthlyBudget(user_id=user.id)
        db.add(budget)
    budget.amount = data.amount
    budget.currency = data.currency.upper()
    await db.flush()
    await db.refresh(budget)
    return budget


@router.get("/usage", response_model=BudgetUsageRead | None)
async def budget_usage(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Consommation du budget ce mois-ci / Budget usage this month."""
    return await current_budget_usage(db, user.id)
