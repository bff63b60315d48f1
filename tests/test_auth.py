import pytest

from conftest import PASSWORD, signup_and_login


@pytest.mark.asyncio
async def test_signup_seeds_default_categories_and_cash(client):
    headers = await signup_and_login(client)

    res = await client.get("/api/v1/categories", headers=headers)
    assert res.status_code == 200
    names = [c["name"] for c in res.json()]
    assert names[0] == "식비"
    assert {"급여", "기타수입", "기타지출"} <= set(names)
    assert all(c["is_default"] for c in res.json())

    res = await client.get("/api/v1/payment-methods", headers=headers)
    methods = res.json()
    assert [(m["name"], m["type"]) for m in methods] == [("현금", "cash")]


@pytest.mark.asyncio
async def test_signup_password_mismatch(client):
    res = await client.post(
        "/api/v1/auth/signup",
        json={"email": "a@example.com", "password": PASSWORD, "password_confirm": "different"},
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "비밀번호가 일치하지 않습니다."


@pytest.mark.asyncio
async def test_signup_existing_email(client):
    await signup_and_login(client, "dup@example.com")
    res = await client.post(
        "/api/v1/auth/signup",
        json={"email": "dup@example.com", "password": PASSWORD, "password_confirm": PASSWORD},
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "이미 등록된 이메일입니다."


@pytest.mark.asyncio
async def test_signup_short_password_message_passes_through(client):
    res = await client.post(
        "/api/v1/auth/signup",
        json={"email": "short@example.com", "password": "abc", "password_confirm": "abc"},
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "비밀번호는 6자 이상이어야 합니다."


@pytest.mark.asyncio
async def test_login_bad_credentials(client):
    await signup_and_login(client, "me@example.com")
    res = await client.post("/api/v1/auth/login", json={"email": "me@example.com", "password": "wrong-pass"})
    assert res.status_code == 400
    assert res.json()["detail"] == "이메일 또는 비밀번호가 올바르지 않습니다."

    res = await client.post("/api/v1/auth/login", json={"email": "nobody@example.com", "password": PASSWORD})
    assert res.json()["detail"] == "이메일 또는 비밀번호가 올바르지 않습니다."


@pytest.mark.asyncio
async def test_login_sets_cookie_that_authenticates(client):
    await signup_and_login(client, "cookie@example.com")
    res = await client.post("/api/v1/auth/login", json={"email": "cookie@example.com", "password": PASSWORD})
    assert "access_token" in res.cookies

    res = await client.get("/api/v1/auth/me")
    assert res.status_code == 200
    assert res.json()["email"] == "cookie@example.com"

    res = await client.post("/api/v1/auth/logout")
    assert res.status_code == 200
    client.cookies.clear()
    res = await client.get("/api/v1/auth/me")
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_writes_without_session_are_rejected(client):
    res = await client.post("/api/v1/transactions", json={"amount": 1000, "date": "2025-03-01"})
    assert res.status_code == 401
    res = await client.get("/api/v1/views/calendar", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_auth_error_page(client):
    res = await client.get("/auth/error", params={"error": "access_denied"})
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "오류가 발생했습니다"
    assert body["message"] == "오류 코드: access_denied"

    res = await client.get("/auth/error")
    assert res.json()["message"] == "알 수 없는 오류가 발생했습니다."
