import pytest

from gagyebu.core.db_utils import StoreWriteError
from gagyebu.services import forms


async def _category_id(client, headers, name):
    res = await client.get("/api/v1/categories", headers=headers)
    return next(c["id"] for c in res.json() if c["name"] == name)


async def _card(client, headers, name="신한카드"):
    res = await client.post(
        "/api/v1/payment-methods",
        json={"name": name, "type": "card", "billing_day": 15, "billing_start_day": 1, "billing_end_day": "말일"},
        headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()["id"]


@pytest.mark.asyncio
async def test_recurring_expense_creates_fixed_expense(client, auth_headers):
    housing = await _category_id(client, auth_headers, "주거")
    res = await client.post(
        "/api/v1/transactions",
        json={
            "type": "expense",
            "amount": 50000,
            "category_id": housing,
            "description": "  관리비  ",
            "date": "2025-03-25",
            "is_fixed": True,
        },
        headers=auth_headers,
    )
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["transaction"]["is_fixed"] is True
    assert body["fixed_expense_id"] is not None
    assert body["fixed_expense_error"] is None

    res = await client.get("/api/v1/transactions", params={"year": 2025, "month": 3}, headers=auth_headers)
    assert len(res.json()) == 1

    res = await client.get("/api/v1/fixed-expenses", headers=auth_headers)
    fixed = res.json()
    assert len(fixed) == 1
    assert fixed[0]["due_day"] == 25
    assert fixed[0]["amount"] == 50000
    assert fixed[0]["is_active"] is True
    assert fixed[0]["description"] == "관리비"
    assert fixed[0]["category"]["name"] == "주거"


@pytest.mark.asyncio
async def test_recurring_expense_without_description_uses_default(client, auth_headers):
    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 9900, "date": "2025-03-05", "is_fixed": True, "description": "   "},
        headers=auth_headers,
    )
    assert res.status_code == 201
    res = await client.get("/api/v1/fixed-expenses", headers=auth_headers)
    assert res.json()[0]["description"] == "반복 지출"


@pytest.mark.asyncio
async def test_income_is_never_recurring(client, auth_headers):
    salary = await _category_id(client, auth_headers, "급여")
    res = await client.post(
        "/api/v1/transactions",
        json={"type": "income", "amount": 3000000, "category_id": salary, "date": "2025-03-10", "is_fixed": True},
        headers=auth_headers,
    )
    assert res.status_code == 201
    assert res.json()["transaction"]["is_fixed"] is False
    assert res.json()["fixed_expense_id"] is None
    res = await client.get("/api/v1/fixed-expenses", headers=auth_headers)
    assert res.json() == []


@pytest.mark.asyncio
async def test_installments_only_stored_for_card_expenses(client, auth_headers):
    card = await _card(client, auth_headers)
    res = await client.get("/api/v1/payment-methods", headers=auth_headers)
    cash = next(m["id"] for m in res.json() if m["type"] == "cash")

    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 360000, "payment_method_id": card, "date": "2025-04-02", "installment_months": 3},
        headers=auth_headers,
    )
    assert res.json()["transaction"]["installment_months"] == 3

    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 360000, "payment_method_id": cash, "date": "2025-04-02", "installment_months": 3},
        headers=auth_headers,
    )
    assert res.json()["transaction"]["installment_months"] is None

    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 50000, "payment_method_id": card, "date": "2025-04-02", "installment_months": 1},
        headers=auth_headers,
    )
    assert res.json()["transaction"]["installment_months"] is None


@pytest.mark.asyncio
async def test_invalid_amount_and_installment_are_rejected(client, auth_headers):
    res = await client.post("/api/v1/transactions", json={"amount": 0, "date": "2025-03-01"}, headers=auth_headers)
    assert res.status_code == 422
    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 1000, "date": "2025-03-01", "installment_months": 5},
        headers=auth_headers,
    )
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_failed_fixed_expense_keeps_transaction(client, auth_headers, monkeypatch):
    async def reject(*args, **kwargs):
        raise StoreWriteError("permission denied for table fixed_expenses")

    monkeypatch.setattr(forms.fixed_expense_crud, "create_fixed_expense_for_user", reject)
    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 12000, "date": "2025-03-25", "is_fixed": True},
        headers=auth_headers,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["fixed_expense_id"] is None
    assert body["fixed_expense_error"] == "저장에 실패했습니다: permission denied for table fixed_expenses"

    res = await client.get("/api/v1/transactions", params={"year": 2025, "month": 3}, headers=auth_headers)
    assert len(res.json()) == 1


@pytest.mark.asyncio
async def test_store_failure_returns_labelled_400(client, auth_headers, monkeypatch):
    async def reject(*args, **kwargs):
        raise StoreWriteError("new row violates row-level security policy")

    monkeypatch.setattr(forms.transaction_crud, "insert_transaction", reject)
    res = await client.post("/api/v1/transactions", json={"amount": 1000, "date": "2025-03-01"}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["detail"] == "저장에 실패했습니다: new row violates row-level security policy"


@pytest.mark.asyncio
async def test_list_is_cached_until_a_write_invalidates_it(client, auth_headers):
    params = {"year": 2025, "month": 5}
    res = await client.get("/api/v1/transactions", params=params, headers=auth_headers)
    assert res.json() == []

    await client.post("/api/v1/transactions", json={"amount": 7000, "date": "2025-05-02"}, headers=auth_headers)
    res = await client.get("/api/v1/transactions", params=params, headers=auth_headers)
    assert [t["amount"] for t in res.json()] == [7000]


@pytest.mark.asyncio
async def test_update_moves_transaction_between_months(client, auth_headers):
    res = await client.post("/api/v1/transactions", json={"amount": 4000, "date": "2025-05-31"}, headers=auth_headers)
    tx_id = res.json()["transaction"]["id"]
    # Warm both month caches
    await client.get("/api/v1/transactions", params={"year": 2025, "month": 5}, headers=auth_headers)
    await client.get("/api/v1/transactions", params={"year": 2025, "month": 6}, headers=auth_headers)

    res = await client.patch(f"/api/v1/transactions/{tx_id}", json={"date": "2025-06-01", "memo": "이월"}, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["memo"] == "이월"

    may = await client.get("/api/v1/transactions", params={"year": 2025, "month": 5}, headers=auth_headers)
    june = await client.get("/api/v1/transactions", params={"year": 2025, "month": 6}, headers=auth_headers)
    assert may.json() == []
    assert [t["id"] for t in june.json()] == [tx_id]


@pytest.mark.asyncio
async def test_delete_transaction(client, auth_headers):
    res = await client.post("/api/v1/transactions", json={"amount": 4000, "date": "2025-05-10"}, headers=auth_headers)
    tx_id = res.json()["transaction"]["id"]

    res = await client.delete(f"/api/v1/transactions/{tx_id}", headers=auth_headers)
    assert res.status_code == 204
    res = await client.get(f"/api/v1/transactions/{tx_id}", headers=auth_headers)
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_users_cannot_see_each_others_transactions(client, auth_headers):
    from conftest import signup_and_login

    res = await client.post("/api/v1/transactions", json={"amount": 4000, "date": "2025-05-10"}, headers=auth_headers)
    tx_id = res.json()["transaction"]["id"]

    other = await signup_and_login(client, "other@example.com")
    res = await client.get(f"/api/v1/transactions/{tx_id}", headers=other)
    assert res.status_code == 404
    res = await client.get("/api/v1/transactions", params={"year": 2025, "month": 5}, headers=other)
    assert res.json() == []


@pytest.mark.asyncio
async def test_form_options_filter_categories_by_type(client, auth_headers):
    res = await client.get("/api/v1/transactions/form-options", params={"type": "income"}, headers=auth_headers)
    body = res.json()
    assert sorted(c["name"] for c in body["categories"]) == ["급여", "기타수입"]
    assert [o["value"] for o in body["installment_options"]] == [1, 2, 3, 6, 12, 24]

    res = await client.get("/api/v1/transactions/form-options", headers=auth_headers)
    names = [c["name"] for c in res.json()["categories"]]
    assert "급여" not in names and "식비" in names


@pytest.mark.asyncio
async def test_create_rejects_another_users_category_or_payment_method(client, auth_headers):
    from conftest import signup_and_login

    other = await signup_and_login(client, "other@example.com")
    foreign_category = await _category_id(client, other, "식비")
    foreign_card = await _card(client, other)

    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 8000, "date": "2025-05-10", "category_id": foreign_category},
        headers=auth_headers,
    )
    assert res.status_code == 404
    assert res.json()["detail"] == "Category not found"

    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 8000, "date": "2025-05-10", "payment_method_id": foreign_card},
        headers=auth_headers,
    )
    assert res.status_code == 404
    assert res.json()["detail"] == "Payment method not found"

    res = await client.get("/api/v1/transactions", params={"year": 2025, "month": 5}, headers=auth_headers)
    assert res.json() == []


@pytest.mark.asyncio
async def test_update_rejects_another_users_category_or_payment_method(client, auth_headers):
    from conftest import signup_and_login

    food = await _category_id(client, auth_headers, "식비")
    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 8000, "date": "2025-05-10", "category_id": food},
        headers=auth_headers,
    )
    tx_id = res.json()["transaction"]["id"]

    other = await signup_and_login(client, "other@example.com")
    foreign_category = await _category_id(client, other, "교통")
    foreign_card = await _card(client, other)

    res = await client.patch(f"/api/v1/transactions/{tx_id}", json={"category_id": foreign_category}, headers=auth_headers)
    assert res.status_code == 404
    res = await client.patch(f"/api/v1/transactions/{tx_id}", json={"payment_method_id": foreign_card}, headers=auth_headers)
    assert res.status_code == 404

    res = await client.get(f"/api/v1/transactions/{tx_id}", headers=auth_headers)
    tx = res.json()
    assert tx["category_id"] == food
    assert tx["category"]["name"] == "식비"
    assert tx["payment_method_id"] is None


@pytest.mark.asyncio
async def test_switching_from_card_to_cash_drops_installments(client, auth_headers):
    card = await _card(client, auth_headers)
    res = await client.get("/api/v1/payment-methods", headers=auth_headers)
    cash = next(m["id"] for m in res.json() if m["type"] == "cash")

    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 360000, "payment_method_id": card, "date": "2025-04-02", "installment_months": 3},
        headers=auth_headers,
    )
    tx_id = res.json()["transaction"]["id"]

    # Changing only the amount keeps the stored months
    res = await client.patch(f"/api/v1/transactions/{tx_id}", json={"amount": 300000}, headers=auth_headers)
    assert res.json()["installment_months"] == 3

    res = await client.patch(f"/api/v1/transactions/{tx_id}", json={"payment_method_id": cash}, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["installment_months"] is None


@pytest.mark.asyncio
async def test_switching_installment_expense_to_income_drops_installments(client, auth_headers):
    card = await _card(client, auth_headers)
    res = await client.post(
        "/api/v1/transactions",
        json={"amount": 120000, "payment_method_id": card, "date": "2025-04-02", "installment_months": 6},
        headers=auth_headers,
    )
    tx_id = res.json()["transaction"]["id"]

    res = await client.patch(f"/api/v1/transactions/{tx_id}", json={"type": "income"}, headers=auth_headers)
    assert res.json()["type"] == "income"
    assert res.json()["installment_months"] is None
