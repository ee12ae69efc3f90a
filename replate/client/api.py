"""
HTTP client for the Replate API.
Keeps the board state in sync with the server round-trips (fetch, post, claim).
"""

from typing import Any

import httpx

from replate.client.board import BoardState

API_BASE = "http://localhost:8000/api"


class ApiError(Exception):
    """Non-2xx response (or a call that needs login made without a token)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ReplateClient:
    def __init__(
        self,
        state: BoardState | None = None,
        base_url: str = API_BASE,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.state = state or BoardState()
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ReplateClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _auth_headers(self) -> dict[str, str]:
        if not self.state.token:
            raise ApiError("Please login first.")
        return {"Authorization": f"Bearer {self.state.token}"}

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            body = None
        if response.is_error:
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(message or f"HTTP {response.status_code}", response.status_code)
        return body

    def signup(self, name: str, email: str, password: str) -> str:
        r = self._http.post("/signup", json={"name": name, "email": email, "password": password})
        return self._json(r)["message"]

    def login(self, email: str, password: str) -> str:
        r = self._http.post("/login", json={"email": email, "password": password})
        body = self._json(r)
        self.state.token = body["token"]
        return body["message"]

    def logout(self) -> None:
        self.state.token = None

    def fetch_listings(self) -> list[dict]:
        body = self._json(self._http.get("/listings"))
        self.state.listings = body if isinstance(body, list) else []
        return self.state.listings

    def create_listing(self, fields: dict[str, Any]) -> dict:
        headers = self._auth_headers()
        body = self._json(self._http.post("/listings", json=fields, headers=headers))
        self.fetch_listings()
        return body["data"]

    def claim(self, listing_id: int | str) -> str:
        headers = self._auth_headers()
        body = self._json(self._http.delete(f"/listings/{listing_id}", headers=headers))
        self.state.drop(listing_id)
        return body.get("message", "Listing claimed successfully!")
