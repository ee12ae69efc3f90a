"""
Listing store - the adapter between the listing service and a document store backend.
Challenge: Assign unique ids and stamp ownership without a database, on a store that
may use its own column names.
Design: One instance per process; an asyncio lock serializes every read-modify-write.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as SchemaError

from replate.schemas.listing import Listing, ListingCreate
from replate.store.backends import StoreBackend
from replate.store.field_map import FieldMap, IDENTITY

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def isoformat(moment: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix, e.g. 2025-01-31T09:15:02.120Z."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ListingStore:
    """Listings collection: list, append with id assignment, remove by id."""

    def __init__(
        self,
        backend: StoreBackend,
        field_map: FieldMap = IDENTITY,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.backend = backend
        self.field_map = field_map
        self.clock = clock
        self._lock = asyncio.Lock()
        # Highest id handed out by this process; keeps ids from being reused after deletes
        self._last_issued_id = 0

    def _parse(self, record: dict[str, Any]) -> Listing | None:
        try:
            return Listing.model_validate(self.field_map.to_client(record))
        except SchemaError as e:
            logger.warning(
                "Skipping unreadable listing record id=%r: %s",
                record.get(self.field_map.external_name("id")),
                e.errors()[0]["msg"] if e.errors() else e,
            )
            return None

    async def list_all(self) -> list[Listing]:
        """All readable listings. Raises StoreUnavailable if the backend cannot be read."""
        records = await self.backend.fetch_all()
        return [listing for listing in map(self._parse, records) if listing is not None]

    async def append(self, fields: ListingCreate, created_by: str) -> Listing:
        """Assign the next id, stamp creator and time, persist, return the stored listing."""
        async with self._lock:
            existing = await self.list_all()
            next_id = max([listing.id for listing in existing] + [self._last_issued_id]) + 1
            listing = Listing(
                **fields.model_dump(),
                id=next_id,
                created_by=created_by,
                created_at=isoformat(self.clock()),
            )
            self._last_issued_id = next_id
            await self.backend.add(self.field_map.to_external(listing.to_document()))
        logger.info("Listing %s saved for %s", listing.id, created_by)
        return listing

    async def remove_by_id(
        self,
        listing_id: int | str,
        precondition: Callable[[Listing], None] | None = None,
    ) -> bool:
        """
        Remove the listing whose id matches (string compare). False if there is none.
        precondition runs under the lock with the matched listing and may raise to veto.
        """
        key = str(listing_id)
        async with self._lock:
            match = next(
                (listing for listing in await self.list_all() if str(listing.id) == key), None
            )
            if match is None:
                return False
            if precondition is not None:
                precondition(match)
            await self.backend.delete(key, id_field=self.field_map.external_name("id"))
        logger.info("Listing %s removed", key)
        return True
