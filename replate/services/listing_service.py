"""
Listing service - business logic for listings (SOLID: Single Responsibility).
Challenge: Server-side ownership stamps, public reads that never fail, one delete policy point.
Design: Service depends on the store abstraction; easy to test with a temp file store.
"""

import logging
from collections.abc import Callable

from replate.config import get_settings
from replate.core.exceptions import Forbidden, NotFound, StoreUnavailable, ValidationError
from replate.metrics import LISTINGS_CLAIMED, LISTINGS_CREATED
from replate.schemas.listing import Listing, ListingCreate
from replate.schemas.user import Identity
from replate.store.listing_store import ListingStore
from replate.store.user_store import normalize_email

logger = logging.getLogger(__name__)


def owner_only(identity: Identity) -> Callable[[Listing], None]:
    """Delete guard for DELETE_POLICY=owner."""

    def check(listing: Listing) -> None:
        if normalize_email(listing.created_by) != normalize_email(identity.email):
            raise Forbidden()

    return check


class ListingService:
    """Handles listing use cases: post, browse, claim."""

    def __init__(self, store: ListingStore, delete_policy: str | None = None):
        self.store = store
        self.delete_policy = delete_policy or get_settings().delete_policy

    async def create(self, identity: Identity, fields: ListingCreate | None) -> Listing:
        """Store a listing owned by the caller. createdBy/createdAt always come from the server."""
        if fields is None or not fields.model_fields_set:
            raise ValidationError("Listing body required.")
        listing = await self.store.append(fields, created_by=identity.email)
        LISTINGS_CREATED.inc()
        return listing

    async def list_listings(self) -> list[Listing]:
        """Public read. Store failures degrade to an empty list so the board stays up."""
        try:
            return await self.store.list_all()
        except StoreUnavailable as e:
            logger.error("Listing read failed, serving empty list: %s", e.detail)
            return []

    async def remove(self, identity: Identity, listing_id: str | None) -> dict:
        """Claim a listing by deleting it."""
        if listing_id is None or not str(listing_id).strip():
            raise ValidationError("Listing ID required.")
        key = str(listing_id).strip()
        if not (key.isascii() and key.isdigit()):
            raise ValidationError("Invalid listing ID.")
        guard = owner_only(identity) if self.delete_policy == "owner" else None
        removed = await self.store.remove_by_id(key, precondition=guard)
        if not removed:
            raise NotFound()
        LISTINGS_CLAIMED.inc()
        logger.info("Listing %s claimed by %s", key, identity.email)
        return {"message": "Listing claimed and removed successfully!"}
