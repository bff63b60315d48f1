# gagyebu/utils/formatting.py
import calendar
import math
from datetime import date, datetime
from typing import Tuple, Union

Number = Union[int, float]

WEEKDAY_NAMES = ["일", "월", "화", "수", "목", "금", "토"]

# Spent/budget ratios where the status changes
WARNING_RATIO = 0.7
DANGER_RATIO = 1.0


def _group(amount: Number) -> str:
    # ko-KR grouping: thousands separators, no decimals for whole numbers
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.3f}".rstrip("0").rstrip(".")


def format_currency(amount: Number) -> str:
    return _group(amount) + "원"


def format_currency_short(amount: Number) -> str:
    """15000 -> "1만5,000", 30000 -> "3만", 9500 -> "9,500"."""
    if amount >= 10000:
        man = int(amount // 10000)
        remainder = amount % 10000
        if remainder == 0:
            return f"{man}만"
        return f"{man}만{_group(remainder)}"
    return _group(amount)


def format_man_won(amount: Number) -> str:
    if amount >= 10000:
        return f"{int(amount // 10000)}만원"
    return format_currency(amount)


def format_signed_amount(amount: Number, tx_type: str) -> str:
    sign = "+" if tx_type == "income" else "-"
    return f"{sign}{format_currency(amount)}"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ────────────────────────────────────────────────────────────────────────────────
# CALENDAR
# ────────────────────────────────────────────────────────────────────────────────
def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the 1st, counted from Sunday = 0."""
    return (date(year, month, 1).weekday() + 1) % 7


def weekday_of(day: date) -> int:
    return (day.weekday() + 1) % 7


def weekday_name(index: int) -> str:
    return WEEKDAY_NAMES[index]


def format_date(value: Union[date, datetime]) -> str:
    return f"{value.year}-{value.month:02d}-{value.day:02d}"


def parse_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def month_range(year: int, month: int) -> Tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


# ────────────────────────────────────────────────────────────────────────────────
# BUDGET
# ────────────────────────────────────────────────────────────────────────────────
def budget_status(spent: Number, budget: Number) -> str:
    if budget == 0:
        return "safe"
    ratio = spent / budget
    if ratio >= DANGER_RATIO:
        return "danger"
    if ratio >= WARNING_RATIO:
        return "warning"
    return "safe"


def budget_percentage(spent: Number, budget: Number) -> float:
    if budget <= 0:
        return 0.0
    return min(spent / budget * 100, 100.0)


# ────────────────────────────────────────────────────────────────────────────────
# INSTALLMENTS
# ────────────────────────────────────────────────────────────────────────────────
INSTALLMENT_OPTIONS = [
    {"value": 1, "label": "일시불"},
    {"value": 2, "label": "2개월"},
    {"value": 3, "label": "3개월"},
    {"value": 6, "label": "6개월"},
    {"value": 12, "label": "12개월"},
    {"value": 24, "label": "24개월"},
]

INSTALLMENT_MONTHS = {opt["value"] for opt in INSTALLMENT_OPTIONS}


def installment_monthly_amount(amount: Number, months: int) -> int:
    return math.ceil(amount / months)


def installment_label(amount: Number, months: int) -> str:
    return f"월 {installment_monthly_amount(amount, months):,}원 × {months}개월"
