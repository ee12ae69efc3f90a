"""
User store - identity records in a document store.
Challenge: The store has no unique constraint, so duplicate-email protection lives here.
"""

import asyncio
from typing import Any

from replate.core.exceptions import DuplicateUser
from replate.store.backends import StoreBackend


def normalize_email(email: Any) -> str:
    return str(email or "").lower()


class UserStore:
    """Users collection. Records are {name, email, password} with password hashed."""

    def __init__(self, backend: StoreBackend):
        self.backend = backend
        self._lock = asyncio.Lock()

    async def list_all(self) -> list[dict[str, Any]]:
        return await self.backend.fetch_all()

    async def find_by_email(self, email: str) -> dict[str, Any] | None:
        """Case-insensitive lookup."""
        wanted = normalize_email(email)
        for user in await self.list_all():
            if normalize_email(user.get("email")) == wanted:
                return user
        return None

    async def create(self, record: dict[str, Any]) -> dict[str, Any]:
        """Check-then-append as one step. Raises DuplicateUser if the email is taken in any case."""
        async with self._lock:
            if await self.find_by_email(record["email"]) is not None:
                raise DuplicateUser()
            await self.backend.add(record)
        return record
