# gagyebu/api/v1/routes/views.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, Optional, Tuple

from gagyebu.core.database import get_async_session
from gagyebu.core.auth import User
from gagyebu.api.deps import get_current_user
from gagyebu.services.queries import (
    unwrap,
    use_categories,
    use_fixed_expenses,
    use_payment_methods,
    use_transactions,
)
from gagyebu.services.views import (
    build_budget_view,
    build_calendar_view,
    build_day_detail,
    build_shell,
    build_stats_view,
    build_wallet_view,
    today_local,
)
from gagyebu.utils.formatting import format_date, parse_date

router = APIRouter(tags=["views"])

def _month_or_current(year: Optional[int], month: Optional[int]) -> Tuple[int, int]:
    today = today_local()
    return year or today.year, month or today.month

YearQuery = Query(None, ge=1900, le=9999, description="Defaults to the current year")
MonthQuery = Query(None, ge=1, le=12, description="1-based; defaults to the current month")

@router.get("/views/calendar")
async def get_calendar_view(
    year: Optional[int] = YearQuery,
    month: Optional[int] = MonthQuery,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
) -> Dict[str, Any]:
    """
    Month grid with per-day income/expense totals and holiday names,
    plus the month summary cards.
    """
    year, month = _month_or_current(year, month)
    transactions = unwrap(await use_transactions(db, user.id, year, month))
    return build_calendar_view(year, month, transactions)

@router.get("/views/calendar/{day}")
async def get_day_detail(
    day: str,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
) -> Dict[str, Any]:
    try:
        selected = parse_date(day)
    except ValueError:
        raise HTTPException(status_code=400, detail="Date must be YYYY-MM-DD")
    transactions = unwrap(await use_transactions(db, user.id, selected.year, selected.month))
    return build_day_detail(format_date(selected), transactions)

@router.get("/views/budget")
async def get_budget_view(
    year: Optional[int] = YearQuery,
    month: Optional[int] = MonthQuery,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
) -> Dict[str, Any]:
    year, month = _month_or_current(year, month)
    categories = unwrap(await use_categories(db, user.id))
    transactions = unwrap(await use_transactions(db, user.id, year, month))
    fixed_expenses = unwrap(await use_fixed_expenses(db, user.id))
    return build_budget_view(year, month, categories, transactions, fixed_expenses)

@router.get("/views/wallet")
async def get_wallet_view(
    year: Optional[int] = YearQuery,
    month: Optional[int] = MonthQuery,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
) -> Dict[str, Any]:
    year, month = _month_or_current(year, month)
    payment_methods = unwrap(await use_payment_methods(db, user.id))
    transactions = unwrap(await use_transactions(db, user.id, year, month))
    return build_wallet_view(year, month, payment_methods, transactions)

@router.get("/views/stats")
async def get_stats_view(
    year: Optional[int] = YearQuery,
    month: Optional[int] = MonthQuery,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
) -> Dict[str, Any]:
    year, month = _month_or_current(year, month)
    categories = unwrap(await use_categories(db, user.id))
    payment_methods = unwrap(await use_payment_methods(db, user.id))
    transactions = unwrap(await use_transactions(db, user.id, year, month))
    return build_stats_view(year, month, categories, payment_methods, transactions)

@router.get("/shell")
async def get_shell(user: User = Depends(get_current_user)) -> Dict[str, Any]:
    """Tab bar and the month the app opens on."""
    return {**build_shell(), "user": {"id": str(user.id), "email": user.email}}
