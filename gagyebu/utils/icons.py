# gagyebu/utils/icons.py
from typing import Dict, Iterable, List, TypeVar

T = TypeVar("T")

KNOWN_ICONS = {
    "utensils",
    "car",
    "shopping-bag",
    "home",
    "music",
    "heart-pulse",
    "book-open",
    "banknote",
    "plus-circle",
    "minus-circle",
    "credit-card",
    "circle",
    "wallet",
    "coffee",
    "plane",
    "gift",
    "smartphone",
    "dumbbell",
    "scissors",
    "baby",
}

FALLBACK_ICON = "circle"
FALLBACK_COLOR = "#6B7280"

DEFAULT_CATEGORY_ICON = "✨"
DEFAULT_CATEGORY_COLOR = FALLBACK_COLOR

CATEGORY_COLORS = [
    "#EF4444", "#F97316", "#F59E0B", "#EAB308",
    "#22C55E", "#10B981", "#14B8A6", "#06B6D4",
    "#3B82F6", "#6366F1", "#8B5CF6", "#EC4899",
    "#6B7280", "#78716C",
]

PAYMENT_TYPE_COLORS = {
    "card": "#3B82F6",
    "bank": "#10B981",
    "cash": "#22C55E",
    "other": "#6B7280",
}

PAYMENT_TYPE_ICONS = {
    "card": "credit-card",
    "bank": "wallet",
    "cash": "banknote",
    "other": "circle",
}

PAYMENT_TYPE_LABELS = {
    "card": "카드",
    "bank": "은행",
    "cash": "현금",
    "other": "기타",
}

INCOME_CATEGORY_NAMES = ("급여", "기타수입")


def resolve_icon(name: str) -> Dict[str, str]:
    """Known names render as an icon; anything else is shown as an emoji glyph."""
    if not name:
        return {"kind": "icon", "value": FALLBACK_ICON}
    if name in KNOWN_ICONS:
        return {"kind": "icon", "value": name}
    return {"kind": "emoji", "value": name}


def categories_for_type(categories: Iterable[T], tx_type: str) -> List[T]:
    if tx_type == "income":
        return [c for c in categories if c.name in INCOME_CATEGORY_NAMES]
    return [c for c in categories if c.name not in INCOME_CATEGORY_NAMES]
