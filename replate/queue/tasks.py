"""
Celery tasks - event-driven notification delivery.
Fired after a listing is created (API publishes, worker consumes).
"""

import logging

import httpx

from replate.config import get_settings
from replate.queue.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=1)
def notify_new_listing_task(self, payload: dict):
    """POST the new listing to the webhook. One retry, then the failure is left in the worker log."""
    settings = get_settings()
    if not settings.notify_webhook_url:
        return
    try:
        response = httpx.post(
            settings.notify_webhook_url, json=payload, timeout=settings.notify_timeout_seconds
        )
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Webhook delivery for listing %s failed: %r", payload.get("id"), exc)
        raise self.retry(exc=exc, countdown=5)
