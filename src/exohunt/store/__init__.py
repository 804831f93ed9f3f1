"""Remote table access."""

from exohunt.store.base import RowStore, StoreResult
from exohunt.store.postgrest import PostgrestRowStore

__all__ = ["PostgrestRowStore", "RowStore", "StoreResult"]
