import uuid
from datetime import date
from types import SimpleNamespace

from gagyebu.utils.aggregation import (
    UNCATEGORIZED,
    category_breakdown,
    daily_totals,
    monthly_totals,
    payment_method_breakdown,
    spending_by_category,
    transactions_on,
)

FOOD = SimpleNamespace(id=uuid.uuid4(), name="식비", icon="utensils", color="#FF6B6B")
CAFE = SimpleNamespace(id=uuid.uuid4(), name="카페", icon="coffee", color="#A0522D")
CARD = SimpleNamespace(id=uuid.uuid4(), name="신한카드", color="#3B82F6")


def make_tx(tx_type, amount, day, category=None, payment_method=None):
    return SimpleNamespace(
        type=tx_type,
        amount=amount,
        date=date(2025, 3, day),
        category_id=category,
        payment_method_id=payment_method,
    )


TRANSACTIONS = [
    make_tx("income", 3000000, 1, None),
    make_tx("expense", 12000, 1, FOOD.id, CARD.id),
    make_tx("expense", 4500, 3, CAFE.id, CARD.id),
    make_tx("expense", 8000, 3, FOOD.id),
    make_tx("expense", 2000, 10, uuid.uuid4()),  # category since deleted
    make_tx("expense", 1500, 10, None),
]


def test_monthly_totals():
    totals = monthly_totals(TRANSACTIONS)
    assert totals == {"income": 3000000, "expense": 28000, "balance": 2972000}


def test_daily_totals_sum_to_monthly_totals():
    daily = daily_totals(TRANSACTIONS)
    totals = monthly_totals(TRANSACTIONS)
    assert sum(d["income"] for d in daily.values()) == totals["income"]
    assert sum(d["expense"] for d in daily.values()) == totals["expense"]
    assert daily["2025-03-03"] == {"income": 0, "expense": 12500}
    assert "2025-03-02" not in daily


def test_transactions_on():
    assert len(transactions_on(TRANSACTIONS, "2025-03-10")) == 2
    assert transactions_on(TRANSACTIONS, "2025-03-11") == []


def test_spending_by_category_skips_missing_category():
    spent = spending_by_category(TRANSACTIONS)
    assert spent[FOOD.id] == 20000
    assert spent[CAFE.id] == 4500
    assert None not in spent


def test_category_breakdown_groups_unknown_under_uncategorized():
    stats = category_breakdown(TRANSACTIONS, [FOOD, CAFE])
    assert [s["name"] for s in stats] == ["식비", "카페", UNCATEGORIZED]
    uncategorized = stats[-1]
    assert uncategorized["id"] is None
    assert uncategorized["amount"] == 3500
    # Every expense lands in exactly one bucket
    assert sum(s["amount"] for s in stats) == monthly_totals(TRANSACTIONS)["expense"]
    assert stats[0]["percentage"] == 71  # 20000 / 28000


def test_payment_breakdown():
    stats = payment_method_breakdown(TRANSACTIONS, [CARD])
    assert stats[1]["name"] == UNCATEGORIZED
    assert stats[1]["amount"] == 11500
    assert stats[0] == {
        "id": str(CARD.id),
        "name": "신한카드",
        "color": "#3B82F6",
        "amount": 16500,
        "percentage": 59,
    }
    assert "icon" not in stats[0]


def test_empty_month():
    assert category_breakdown([], [FOOD]) == []
    assert monthly_totals([]) == {"income": 0, "expense": 0, "balance": 0}
