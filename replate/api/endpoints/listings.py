"""
Listing endpoints - public board reads, token-gated post and claim.
Design: Thin controller; service layer holds business logic.
"""

from fastapi import APIRouter, BackgroundTasks

from replate.core.dependencies import CurrentIdentity
from replate.core.exceptions import ValidationError
from replate.queue.notifications import dispatch_new_listing
from replate.schemas.listing import Listing, ListingCreate, ListingCreatedResponse
from replate.schemas.user import MessageResponse
from replate.services.listing_service import ListingService
from replate.store.provider import ListingStoreDep

router = APIRouter()


@router.get("", response_model=list[Listing])
async def list_listings(store: ListingStoreDep):
    """All listings. Never fails: store errors degrade to []."""
    return await ListingService(store).list_listings()


@router.post("", response_model=ListingCreatedResponse)
async def create_listing(
    store: ListingStoreDep,
    identity: CurrentIdentity,
    background_tasks: BackgroundTasks,
    data: ListingCreate | None = None,
):
    """Post a listing owned by the caller. The webhook fires after the response is sent."""
    listing = await ListingService(store).create(identity, data)
    background_tasks.add_task(dispatch_new_listing, listing)
    return {"message": "Listing saved successfully!", "data": listing}


@router.delete("", response_model=MessageResponse)
async def delete_listing_without_id(identity: CurrentIdentity):
    raise ValidationError("Listing ID required.")


@router.delete("/{listing_id}", response_model=MessageResponse)
async def delete_listing(store: ListingStoreDep, identity: CurrentIdentity, listing_id: str):
    """Claim (remove) a listing."""
    return await ListingService(store).remove(identity, listing_id)
