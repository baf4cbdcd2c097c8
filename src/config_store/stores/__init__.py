"""Storage backends for configuration records."""

from config_store.stores.base import SORT_FIELDS, RecordStore
from config_store.stores.memory import InMemoryStore
from config_store.stores.sqlite import SQLiteStore

__all__ = ["SORT_FIELDS", "InMemoryStore", "RecordStore", "SQLiteStore"]
