"""
Board state and client-side filtering.
The full listing set is kept in an explicit state object; every filter or search change
recomputes the visible set from it.
"""

from dataclasses import dataclass, field
from typing import Any

Listing = dict[str, Any]

SEARCH_FIELDS = ("name", "address", "notes")


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def filter_listings(listings: list[Listing], tag: str = "", term: str = "") -> list[Listing]:
    """
    tag: exact match (case-insensitive) against type or role.
    term: case-insensitive substring of name, address or notes.
    Blank tag/term means no constraint.
    """
    tag = tag.strip().lower()
    term = term.strip().lower()
    result = list(listings)
    if tag:
        result = [
            listing for listing in result
            if _text(listing.get("type")).lower() == tag or _text(listing.get("role")).lower() == tag
        ]
    if term:
        result = [
            listing for listing in result
            if any(term in _text(listing.get(f)).lower() for f in SEARCH_FIELDS)
        ]
    return result


@dataclass
class BoardState:
    """Everything the board view knows: listings, current filter/search, login token."""

    listings: list[Listing] = field(default_factory=list)
    tag: str = ""
    term: str = ""
    token: str | None = None

    @property
    def logged_in(self) -> bool:
        return bool(self.token)

    def visible(self) -> list[Listing]:
        return filter_listings(self.listings, self.tag, self.term)

    def reset_filters(self) -> None:
        self.tag = ""
        self.term = ""

    def drop(self, listing_id: int | str) -> None:
        """Forget a claimed listing without refetching."""
        key = str(listing_id)
        self.listings = [listing for listing in self.listings if str(listing.get("id")) != key]


def render_listing(listing: Listing) -> str:
    """Plain-text card, same fields as the web board."""
    return "\n".join(
        [
            f"#{listing.get('id')} {_text(listing.get('name'))} ({_text(listing.get('role'))})",
            f"  Type: {_text(listing.get('type'))} | Qty: {_text(listing.get('quantity'))}",
            f"  Pickup Location: {_text(listing.get('address'))}",
            f"  Contact: {_text(listing.get('phone'))}",
            f"  Notes: {_text(listing.get('notes')) or '-'}",
            f"  Safe-by: {_text(listing.get('safeBy')) or '-'}",
        ]
    )


def render_board(listings: list[Listing]) -> str:
    if not listings:
        return "No listings available."
    return "\n\n".join(render_listing(listing) for listing in listings)
