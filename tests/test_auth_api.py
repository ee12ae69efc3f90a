"""
Signup/login API tests - status codes, messages, credential storage.
"""

import pytest
from httpx import AsyncClient

from replate.core.dependencies import identity_from_token


@pytest.mark.asyncio
async def test_signup_then_login(client: AsyncClient):
    r = await client.post("/api/signup", json={"name": "A", "email": "a@x.com", "password": "p1"})
    assert r.status_code == 200
    assert r.json() == {"message": "Signup successful!"}

    r = await client.post("/api/login", json={"email": "a@x.com", "password": "p1"})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Login successful!"
    identity = identity_from_token(body["token"])
    assert identity.email == "a@x.com"
    assert identity.name == "A"


@pytest.mark.asyncio
async def test_signup_duplicate_email_any_case(client: AsyncClient):
    await client.post("/api/signup", json={"name": "A", "email": "a@x.com", "password": "p1"})
    r = await client.post("/api/signup", json={"name": "B", "email": "A@X.com", "password": "p2"})
    assert r.status_code == 400
    assert r.json()["message"] == "User already exists."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {},
        {"name": "A", "email": "a@x.com"},
        {"name": "", "email": "a@x.com", "password": "p1"},
        {"email": "a@x.com", "password": "p1"},
    ],
)
async def test_signup_missing_fields(client: AsyncClient, body: dict):
    r = await client.post("/api/signup", json=body)
    assert r.status_code == 400
    assert r.json()["message"] == "name, email and password are required."


@pytest.mark.asyncio
async def test_signup_without_body(client: AsyncClient):
    r = await client.post("/api/signup")
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_signup_stores_hashed_password(client: AsyncClient, user_store):
    await client.post("/api/signup", json={"name": "A", "email": "a@x.com", "password": "p1"})
    [stored] = await user_store.list_all()
    assert stored["email"] == "a@x.com"
    assert stored["password"] != "p1"
    assert stored["password"].startswith("$2")


@pytest.mark.asyncio
async def test_login_is_case_insensitive_on_email(client: AsyncClient, test_user):
    r = await client.post("/api/login", json={"email": "TEST@example.COM", "password": "password123"})
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, test_user):
    r = await client.post("/api/login", json={"email": "test@example.com", "password": "Password123"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials."


@pytest.mark.asyncio
async def test_login_unknown_user(client: AsyncClient):
    r = await client.post("/api/login", json={"email": "nobody@example.com", "password": "x"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_login_missing_fields(client: AsyncClient):
    r = await client.post("/api/login", json={"email": "a@x.com"})
    assert r.status_code == 400
    assert r.json()["message"] == "Email and password required."


@pytest.mark.asyncio
async def test_signup_store_write_failure_is_generic_500(client: AsyncClient, user_store, monkeypatch):
    from replate.core.exceptions import StoreWriteError

    async def broken_add(record):
        raise StoreWriteError("disk full at /secret/path")

    monkeypatch.setattr(user_store.backend, "add", broken_add)
    r = await client.post("/api/signup", json={"name": "A", "email": "a@x.com", "password": "p1"})
    assert r.status_code == 500
    assert r.json() == {"message": "Failed to save changes."}


@pytest.mark.asyncio
async def test_signup_store_unreachable_is_502(client: AsyncClient, user_store):
    user_store.backend.path.write_text("[{broken", encoding="utf-8")
    r = await client.post("/api/signup", json={"name": "A", "email": "a@x.com", "password": "p1"})
    assert r.status_code == 502
    assert "broken" not in r.text
