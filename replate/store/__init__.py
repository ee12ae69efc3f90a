# Document store adapter: backends, field translation, per-collection stores

from replate.store.backends import JsonFileBackend, SheetBackend, StoreBackend
from replate.store.field_map import IDENTITY, SHEET_LISTING_FIELDS, FieldMap
from replate.store.listing_store import ListingStore
from replate.store.user_store import UserStore

__all__ = [
    "StoreBackend",
    "JsonFileBackend",
    "SheetBackend",
    "FieldMap",
    "IDENTITY",
    "SHEET_LISTING_FIELDS",
    "ListingStore",
    "UserStore",
]
