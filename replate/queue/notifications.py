"""
New-listing notifications - fire-and-forget webhook after the response is sent.
Challenge: A flaky endpoint must never affect the caller, and must not cause a retry storm.
Design: Scheduled as a FastAPI background task; inline delivery or hand-off to Celery.
"""

import asyncio
import logging

import httpx

from replate.config import get_settings
from replate.metrics import NOTIFICATIONS
from replate.schemas.listing import Listing

logger = logging.getLogger(__name__)


def notification_payload(listing: Listing) -> dict:
    """Webhook body. Keeps the legacy title/location/contact keys automations expect."""
    return {
        "id": listing.id,
        "title": listing.name,
        "name": listing.name,
        "role": listing.role,
        "type": listing.type,
        "location": listing.address,
        "address": listing.address,
        "quantity": listing.quantity,
        "contact": listing.phone,
        "createdBy": listing.created_by,
        "createdAt": listing.created_at,
    }


async def send_notification(
    payload: dict,
    url: str,
    timeout: float = 5.0,
    retries: int = 1,
    retry_delay: float = 1.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """POST payload to url. At most `retries` extra attempts. Returns True on a 2xx."""
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        for attempt in range(1, retries + 2):
            try:
                response = await client.post(url, json=payload)
                if response.is_success:
                    logger.info("Webhook triggered for listing %s", payload.get("id"))
                    NOTIFICATIONS.labels(outcome="delivered").inc()
                    return True
                logger.warning("Webhook responded with %s (attempt %d)", response.status_code, attempt)
            except httpx.HTTPError as e:
                logger.warning("Webhook request failed (attempt %d): %r", attempt, e)
            if attempt <= retries and retry_delay:
                await asyncio.sleep(retry_delay)
    logger.error("Giving up on webhook for listing %s", payload.get("id"))
    NOTIFICATIONS.labels(outcome="failed").inc()
    return False


async def dispatch_new_listing(listing: Listing) -> None:
    """Background task body. Never raises: the response has already been sent."""
    settings = get_settings()
    if not settings.notify_webhook_url:
        return
    payload = notification_payload(listing)
    try:
        if settings.notify_backend == "celery":
            from replate.queue.tasks import notify_new_listing_task

            # Publishing talks to the broker synchronously
            await asyncio.to_thread(notify_new_listing_task.delay, payload)
            NOTIFICATIONS.labels(outcome="queued").inc()
        else:
            await send_notification(payload, settings.notify_webhook_url, settings.notify_timeout_seconds)
    except Exception:
        logger.exception("Notification for listing %s failed", listing.id)
        NOTIFICATIONS.labels(outcome="failed").inc()
