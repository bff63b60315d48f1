# gagyebu/utils/aggregation.py
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Sequence

from gagyebu.utils.formatting import format_date, round_half_up
from gagyebu.utils.icons import FALLBACK_COLOR, FALLBACK_ICON

UNCATEGORIZED = "미분류"


def _type(tx) -> str:
    value = tx.type
    return getattr(value, "value", value)


def _expenses(transactions: Iterable) -> List:
    return [t for t in transactions if _type(t) == "expense"]


# ────────────────────────────────────────────────────────────────────────────────
# TOTALS
# ────────────────────────────────────────────────────────────────────────────────
def monthly_totals(transactions: Iterable) -> Dict[str, int]:
    income = 0
    expense = 0
    for t in transactions:
        if _type(t) == "income":
            income += t.amount
        else:
            expense += t.amount
    return {"income": income, "expense": expense, "balance": income - expense}


def daily_totals(transactions: Iterable) -> Dict[str, Dict[str, int]]:
    """'YYYY-MM-DD' -> {"income", "expense"} for the calendar grid."""
    totals: Dict[str, Dict[str, int]] = {}
    for t in transactions:
        key = format_date(t.date)
        day = totals.setdefault(key, {"income": 0, "expense": 0})
        if _type(t) == "income":
            day["income"] += t.amount
        else:
            day["expense"] += t.amount
    return totals


def transactions_on(transactions: Iterable, date_str: str) -> List:
    return [t for t in transactions if format_date(t.date) == date_str]


# ────────────────────────────────────────────────────────────────────────────────
# SPENDING MAPS
# ────────────────────────────────────────────────────────────────────────────────
def spending_by_category(transactions: Iterable) -> Dict[Any, int]:
    """Expense amount per category_id; transactions without a category are skipped."""
    spent: Dict[Any, int] = defaultdict(int)
    for t in _expenses(transactions):
        if t.category_id:
            spent[t.category_id] += t.amount
    return dict(spent)


def spending_by_payment_method(transactions: Iterable) -> Dict[Any, int]:
    spent: Dict[Any, int] = defaultdict(int)
    for t in _expenses(transactions):
        if t.payment_method_id:
            spent[t.payment_method_id] += t.amount
    return dict(spent)


def _breakdown(
    transactions: Iterable,
    ref_attr: str,
    known: Sequence,
    with_icon: bool,
) -> List[Dict[str, Any]]:
    """
    Expense amount per referenced row, sorted by amount desc.

    Rows that reference nothing, or reference a row that no longer exists,
    share one 미분류 bucket.
    """
    lookup = {row.id: row for row in known}
    amounts: Dict[Optional[Any], int] = defaultdict(int)
    for t in _expenses(transactions):
        ref = getattr(t, ref_attr)
        amounts[ref if ref in lookup else None] += t.amount

    total = sum(amounts.values())
    stats = []
    for ref, amount in amounts.items():
        row = lookup.get(ref)
        item = {
            "id": str(ref) if ref is not None else None,
            "name": row.name if row is not None else UNCATEGORIZED,
            "color": row.color if row is not None else FALLBACK_COLOR,
            "amount": amount,
            "percentage": round_half_up(amount / total * 100) if total > 0 else 0,
        }
        if with_icon:
            item["icon"] = row.icon if row is not None else FALLBACK_ICON
        stats.append(item)
    stats.sort(key=lambda s: s["amount"], reverse=True)
    return stats


def category_breakdown(transactions: Iterable, categories: Sequence) -> List[Dict[str, Any]]:
    return _breakdown(transactions, "category_id", categories, with_icon=True)


def payment_method_breakdown(transactions: Iterable, payment_methods: Sequence) -> List[Dict[str, Any]]:
    return _breakdown(transactions, "payment_method_id", payment_methods, with_icon=False)
