"""Persistence layer for cashbook."""

from cashbook.database.base import KeyValueStore
from cashbook.database.factories import create_sqlite_store
from cashbook.database.stores import EntryStore, CategoryStore, SettingsStore

__all__ = [
    "KeyValueStore",
    "create_sqlite_store",
    "EntryStore",
    "CategoryStore",
    "SettingsStore",
]
