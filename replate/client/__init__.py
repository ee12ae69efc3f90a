# Client side of the board: explicit state, client-side filtering, HTTP round-trips

from replate.client.api import ApiError, ReplateClient
from replate.client.board import BoardState, filter_listings

__all__ = ["ApiError", "ReplateClient", "BoardState", "filter_listings"]
