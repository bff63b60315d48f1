# gagyebu/services/views.py
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence
from zoneinfo import ZoneInfo

from gagyebu.core.config import settings
from gagyebu.utils.aggregation import (
    UNCATEGORIZED,
    category_breakdown,
    daily_totals,
    monthly_totals,
    payment_method_breakdown,
    spending_by_category,
    spending_by_payment_method,
    transactions_on,
)
from gagyebu.utils.formatting import (
    WEEKDAY_NAMES,
    budget_percentage,
    budget_status,
    days_in_month,
    first_weekday,
    format_currency,
    format_date,
    format_man_won,
    format_signed_amount,
    installment_label,
    round_half_up,
    shift_month,
    weekday_of,
)
from gagyebu.utils.holidays import get_korean_holidays
from gagyebu.utils.icons import CATEGORY_COLORS, FALLBACK_COLOR, FALLBACK_ICON, PAYMENT_TYPE_LABELS, resolve_icon

TABS = [
    {"key": "calendar", "label": "캘린더"},
    {"key": "budget", "label": "예산"},
    {"key": "wallet", "label": "지갑"},
    {"key": "stats", "label": "통계"},
]


def today_local() -> date:
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def _value(v):
    return getattr(v, "value", v)


# ────────────────────────────────────────────────────────────────────────────────
# CALENDAR
# ────────────────────────────────────────────────────────────────────────────────
def build_calendar_view(year: int, month: int, transactions: Sequence, today: Optional[date] = None) -> Dict[str, Any]:
    today_str = format_date(today or today_local())
    holidays = get_korean_holidays(year)
    totals = daily_totals(transactions)
    summary = monthly_totals(transactions)

    days = []
    for day in range(1, days_in_month(year, month) + 1):
        current = date(year, month, day)
        key = format_date(current)
        day_totals = totals.get(key, {"income": 0, "expense": 0})
        days.append({
            "date": key,
            "day": day,
            "weekday": weekday_of(current),
            "income": day_totals["income"],
            "expense": day_totals["expense"],
            "holiday": holidays.get(key),
            "is_today": key == today_str,
        })

    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)
    return {
        "year": year,
        "month": month,
        "title": f"{year}년 {month}월",
        "summary": {
            **summary,
            "income_text": format_currency(summary["income"]),
            "expense_text": format_currency(summary["expense"]),
            "balance_text": format_currency(summary["balance"]),
        },
        "days_in_month": len(days),
        "first_weekday": first_weekday(year, month),
        "weekday_names": WEEKDAY_NAMES,
        "prev": {"year": prev_year, "month": prev_month},
        "next": {"year": next_year, "month": next_month},
        "days": days,
    }


def build_day_detail(date_str: str, transactions: Sequence) -> Dict[str, Any]:
    day_transactions = transactions_on(transactions, date_str)
    totals = monthly_totals(day_transactions)

    items = []
    for t in day_transactions:
        category = t.category
        payment_method = t.payment_method
        subtitle = payment_method.name if payment_method else ""
        if t.memo:
            subtitle = f"{subtitle} · {t.memo}"
        item = {
            "id": str(t.id),
            "type": _value(t.type),
            "amount": t.amount,
            "amount_text": format_signed_amount(t.amount, _value(t.type)),
            "title": t.description or (category.name if category else None) or UNCATEGORIZED,
            "subtitle": subtitle,
            "icon": resolve_icon(category.icon if category else FALLBACK_ICON),
            "color": category.color if category else FALLBACK_COLOR,
            "is_fixed": t.is_fixed,
        }
        if t.installment_months and t.installment_months > 1:
            item["installment"] = installment_label(t.amount, t.installment_months)
        items.append(item)

    return {
        "date": date_str,
        "income": totals["income"],
        "expense": totals["expense"],
        "transactions": items,
        "empty_message": "내역이 없습니다" if not items else None,
    }


# ────────────────────────────────────────────────────────────────────────────────
# BUDGET
# ────────────────────────────────────────────────────────────────────────────────
def build_budget_view(
    year: int,
    month: int,
    categories: Sequence,
    transactions: Sequence,
    fixed_expenses: Sequence,
) -> Dict[str, Any]:
    spent_by_category = spending_by_category(transactions)
    budget_categories = [c for c in categories if c.budget_amount > 0]

    rows = []
    for cat in budget_categories:
        spent = spent_by_category.get(cat.id, 0)
        rows.append({
            "id": str(cat.id),
            "name": cat.name,
            "icon": resolve_icon(cat.icon),
            "color": cat.color,
            "budget": cat.budget_amount,
            "spent": spent,
            "remaining": cat.budget_amount - spent,
            "percentage": round_half_up(budget_percentage(spent, cat.budget_amount)),
            "status": budget_status(spent, cat.budget_amount),
        })

    total_budget = sum(c.budget_amount for c in budget_categories)
    total_spent = sum(spent_by_category.get(c.id, 0) for c in budget_categories)

    active_fixed = [fe for fe in fixed_expenses if fe.is_active]
    fixed_rows = []
    for fe in active_fixed:
        schedule = f"매월 {fe.due_day}일" if fe.due_day else ""
        if fe.payment_method:
            schedule = f"{schedule} · {fe.payment_method.name}"
        fixed_rows.append({
            "id": str(fe.id),
            "description": fe.description,
            "amount": fe.amount,
            "due_day": fe.due_day,
            "schedule": schedule,
            "icon": resolve_icon(fe.category.icon if fe.category else FALLBACK_ICON),
            "color": fe.category.color if fe.category else FALLBACK_COLOR,
        })

    return {
        "year": year,
        "month": month,
        "title": f"{month}월 예산 현황",
        "total_budget": total_budget,
        "total_spent": total_spent,
        "total_remaining": total_budget - total_spent,
        "budgets": rows,
        "categories": [
            {"id": str(c.id), "name": c.name, "icon": resolve_icon(c.icon), "color": c.color,
             "budget_amount": c.budget_amount, "is_default": c.is_default}
            for c in categories
        ],
        "category_colors": CATEGORY_COLORS,
        "fixed_expenses": fixed_rows,
        "total_fixed": sum(fe.amount for fe in active_fixed),
    }


# ────────────────────────────────────────────────────────────────────────────────
# WALLET
# ────────────────────────────────────────────────────────────────────────────────
def billing_label(pm) -> str:
    """'매월 15일 결제 (1일~말일 사용분)' for cards, '' otherwise."""
    if _value(pm.type) != "card":
        return ""
    parts = []
    if pm.billing_day:
        parts.append(f"매월 {pm.billing_day}일 결제")
    if pm.billing_start_day is not None and pm.billing_end_day is not None:
        end = "말일" if pm.billing_end_day == 0 else f"{pm.billing_end_day}일"
        parts.append(f"({pm.billing_start_day}일~{end} 사용분)")
    return " ".join(parts)


def build_wallet_view(year: int, month: int, payment_methods: Sequence, transactions: Sequence) -> Dict[str, Any]:
    spent_by_method = spending_by_payment_method(transactions)
    total_spent = sum(spent_by_method.values())

    methods = []
    for pm in payment_methods:
        spent = spent_by_method.get(pm.id, 0)
        ratio = spent / total_spent * 100 if total_spent > 0 else 0.0
        methods.append({
            "id": str(pm.id),
            "name": pm.name,
            "type": _value(pm.type),
            "type_label": PAYMENT_TYPE_LABELS[_value(pm.type)],
            "icon": resolve_icon(pm.icon),
            "color": pm.color,
            "billing_label": billing_label(pm),
            "spent": spent,
            "spent_text": format_currency(spent),
            "ratio": round_half_up(ratio),
        })

    return {
        "year": year,
        "month": month,
        "title": f"{month}월 결제 수단별 현황",
        "total_spent": total_spent,
        "total_spent_text": format_currency(total_spent),
        "payment_methods": methods,
        "empty_message": "등록된 결제 수단이 없습니다" if not methods else None,
    }


# ────────────────────────────────────────────────────────────────────────────────
# STATS
# ────────────────────────────────────────────────────────────────────────────────
def build_stats_view(
    year: int,
    month: int,
    categories: Sequence,
    payment_methods: Sequence,
    transactions: Sequence,
) -> Dict[str, Any]:
    category_stats = category_breakdown(transactions, categories)
    payment_stats = payment_method_breakdown(transactions, payment_methods)
    for stat in category_stats:
        stat["icon"] = resolve_icon(stat["icon"])
    totals = monthly_totals(transactions)
    total_expense = sum(s["amount"] for s in category_stats)

    return {
        "year": year,
        "month": month,
        "title": f"{month}월 통계",
        "total_income": totals["income"],
        "total_expense": total_expense,
        "total_expense_headline": format_man_won(total_expense),
        "category_stats": category_stats,
        "payment_stats": payment_stats,
        "category_empty_message": "지출 데이터가 없습니다" if not category_stats else None,
        "payment_empty_message": "결제 데이터가 없습니다" if not payment_stats else None,
    }


def build_shell(today: Optional[date] = None) -> Dict[str, Any]:
    current = today or today_local()
    return {
        "tabs": TABS,
        "default_tab": "calendar",
        "year": current.year,
        "month": current.month,
        "add_transaction_label": "내역 추가",
    }
