"""
Pytest fixtures - temp-file stores, fake spreadsheet, client, auth.
Challenge: Isolated tests; no real spreadsheet or webhook.
"""

import json
import os

# Settings are read at import time; these must be in place first
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["NOTIFY_WEBHOOK_URL"] = ""
os.environ["DELETE_POLICY"] = "any"

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from replate.core.security import create_access_token, hash_password
from replate.main import app
from replate.store.backends import JsonFileBackend, SheetBackend
from replate.store.field_map import SHEET_LISTING_FIELDS
from replate.store.listing_store import ListingStore
from replate.store.provider import get_listing_store, get_user_store
from replate.store.user_store import UserStore


class FakeSheet:
    """In-memory spreadsheet web app speaking the ?action=get|add|delete protocol."""

    def __init__(self):
        self.sheets: dict[str, list[dict]] = {}
        self.calls: list[tuple[str, str, str]] = []
        # Bodies served (status 200) instead of the rows for the next get calls
        self.broken_reads: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        action = request.url.params.get("action")
        sheet = request.url.params.get("sheet")
        rows = self.sheets.setdefault(sheet, [])
        self.calls.append((request.method, action, sheet))
        if action == "get":
            if self.broken_reads:
                return httpx.Response(200, text=self.broken_reads.pop(0))
            return httpx.Response(200, json=rows)
        if action == "add":
            rows.append(json.loads(request.content))
            return httpx.Response(200, json={"success": True})
        if action == "delete":
            row_id = request.url.params.get("id")
            self.sheets[sheet] = [r for r in rows if str(r.get("listId")) != row_id]
            return httpx.Response(200, json={"success": True})
        return httpx.Response(400, json={"success": False})


@pytest.fixture
def listing_store(tmp_path) -> ListingStore:
    return ListingStore(JsonFileBackend(tmp_path / "listings.json"))


@pytest.fixture
def user_store(tmp_path) -> UserStore:
    return UserStore(JsonFileBackend(tmp_path / "users.json"))


@pytest.fixture
def fake_sheet() -> FakeSheet:
    return FakeSheet()


@pytest_asyncio.fixture
async def sheet_http(fake_sheet: FakeSheet):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_sheet.handler)) as http:
        yield http


@pytest.fixture
def sheet_listing_store(sheet_http) -> ListingStore:
    return ListingStore(
        SheetBackend(sheet_http, "https://sheets.test/exec", "listings"),
        field_map=SHEET_LISTING_FIELDS,
    )


@pytest.fixture
def sheet_user_store(sheet_http) -> UserStore:
    return UserStore(SheetBackend(sheet_http, "https://sheets.test/exec", "users"))


@pytest_asyncio.fixture
async def client(listing_store: ListingStore, user_store: UserStore):
    app.dependency_overrides[get_listing_store] = lambda: listing_store
    app.dependency_overrides[get_user_store] = lambda: user_store
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(user_store: UserStore) -> dict:
    user = {
        "name": "Test User",
        "email": "test@example.com",
        "password": hash_password("password123"),
    }
    await user_store.create(user)
    return user


@pytest.fixture
def auth_headers(test_user: dict) -> dict:
    token = create_access_token(test_user["email"], test_user["name"])
    return {"Authorization": f"Bearer {token}"}
