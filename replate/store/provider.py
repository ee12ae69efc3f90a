"""
Store wiring - builds the process-wide store adapters from settings.
Challenge: Exactly one adapter (and one write lock) per collection, shared HTTP connection pool.
Design: Dependency injection for request handlers; tests override the getters.
"""

import logging
from typing import Annotated

import httpx
from fastapi import Depends

from replate.config import get_settings
from replate.store.backends import JsonFileBackend, SheetBackend
from replate.store.field_map import IDENTITY, SHEET_LISTING_FIELDS
from replate.store.listing_store import ListingStore
from replate.store.user_store import UserStore

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None
_listing_store: ListingStore | None = None
_user_store: UserStore | None = None


def get_http_client() -> httpx.AsyncClient:
    """Shared async HTTP client (connection pool managed by httpx)."""
    global _http_client
    if _http_client is None:
        # Apps Script web apps answer through a redirect
        _http_client = httpx.AsyncClient(follow_redirects=True)
    return _http_client


def build_stores() -> tuple[ListingStore, UserStore]:
    settings = get_settings()
    timeout = settings.store_timeout_seconds
    if settings.store_backend == "sheet":
        if not settings.sheet_url:
            raise RuntimeError("STORE_BACKEND=sheet requires SHEET_URL")
        client = get_http_client()
        listings = ListingStore(
            SheetBackend(client, settings.sheet_url, settings.sheet_listings, timeout),
            field_map=SHEET_LISTING_FIELDS,
        )
        users = UserStore(SheetBackend(client, settings.sheet_url, settings.sheet_users, timeout))
    else:
        listings = ListingStore(JsonFileBackend(settings.listings_file, timeout), field_map=IDENTITY)
        users = UserStore(JsonFileBackend(settings.users_file, timeout))
    logger.info("Document store backend: %s", settings.store_backend)
    return listings, users


def _ensure_stores() -> None:
    global _listing_store, _user_store
    if _listing_store is None or _user_store is None:
        _listing_store, _user_store = build_stores()


def get_listing_store() -> ListingStore:
    _ensure_stores()
    return _listing_store


def get_user_store() -> UserStore:
    _ensure_stores()
    return _user_store


async def close_stores() -> None:
    """Release the HTTP pool on shutdown."""
    global _http_client, _listing_store, _user_store
    if _http_client is not None:
        await _http_client.aclose()
    _http_client = None
    _listing_store = None
    _user_store = None


# Type aliases for FastAPI dependency injection
ListingStoreDep = Annotated[ListingStore, Depends(get_listing_store)]
UserStoreDep = Annotated[UserStore, Depends(get_user_store)]
