"""Prometheus metrics exposed at /metrics."""

from prometheus_client import Counter

LISTINGS_CREATED = Counter("replate_listings_created_total", "Listings posted")
LISTINGS_CLAIMED = Counter("replate_listings_claimed_total", "Listings claimed (removed)")
NOTIFICATIONS = Counter(
    "replate_notifications_total",
    "New-listing webhook deliveries by outcome",
    ["outcome"],
)
