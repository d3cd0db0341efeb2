"""Stores for the ledger's persisted records.

Each store owns one key in a KeyValueStore and holds its value as a single
JSON document. Unreadable documents are logged and treated as empty so that
callers never see decoding failures.
"""

import json
import logging
from typing import Any, Iterable

from sqlalchemy.exc import SQLAlchemyError

from cashbook.database.base import KeyValueStore
from cashbook.database.mappers import (
    category_from_record,
    entry_from_record,
    entry_to_record,
    settings_from_record,
)
from cashbook.domain.entities import AccountingCategory, AppSettings, CashEntry
from cashbook.domain.errors import (
    PersistenceCorruptionError,
    PersistenceError,
    save_failed,
)

logger = logging.getLogger(__name__)

ENTRIES_KEY = "sheno_cash_journal"
CATEGORIES_KEY = "sheno_accounting_categories"
SETTINGS_KEY = "sheno_settings"


def _read_document(store: KeyValueStore, key: str) -> Any:
    """Read and decode the JSON document under key.

    Returns:
        Decoded document, or None if the key is absent

    Raises:
        PersistenceCorruptionError: If the stored blob is not valid JSON
    """
    blob = store.get(key)
    if blob is None:
        return None
    try:
        return json.loads(blob)
    except (TypeError, ValueError) as e:
        raise PersistenceCorruptionError(f"Record '{key}' is not valid JSON: {e}")


class EntryStore:
    """Durable load/save of the cash entry collection."""

    def __init__(self, store: KeyValueStore, key: str = ENTRIES_KEY):
        """Initialize entry store.

        Args:
            store: Key-value store holding the serialized collection
            key: Key the collection is stored under
        """
        self.store = store
        self.key = key

    def load(self) -> list[CashEntry]:
        """Load the collection, newest entry first.

        Missing or corrupt data yields an empty list.
        """
        try:
            document = _read_document(self.store, self.key)
            if document is None:
                return []
            if not isinstance(document, list):
                raise PersistenceCorruptionError(f"Record '{self.key}' is not a list")
            entries = [entry_from_record(record) for record in document]
        except PersistenceCorruptionError as e:
            logger.warning("Ignoring corrupt ledger data: %s", e)
            return []

        seen: set[str] = set()
        unique = []
        for entry in entries:
            if entry.id in seen:
                logger.warning("Dropping entry with duplicate id %s", entry.id)
                continue
            seen.add(entry.id)
            unique.append(entry)
        return unique

    def save(self, entries: Iterable[CashEntry]) -> None:
        """Write the entire collection as one document.

        Raises:
            PersistenceError: If the store does not accept the write
        """
        records = [entry_to_record(entry) for entry in entries]
        try:
            self.store.set(self.key, json.dumps(records, ensure_ascii=False))
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(save_failed(self.key, e)) from e
        logger.debug("Saved %d entries under '%s'", len(records), self.key)


class CategoryStore:
    """Read-only access to the accounting categories."""

    def __init__(self, store: KeyValueStore, key: str = CATEGORIES_KEY):
        self.store = store
        self.key = key

    def load(self) -> list[AccountingCategory]:
        """Load categories; missing or corrupt data yields an empty list."""
        try:
            document = _read_document(self.store, self.key)
            if document is None:
                return []
            if not isinstance(document, list):
                raise PersistenceCorruptionError(f"Record '{self.key}' is not a list")
            return [category_from_record(record) for record in document]
        except PersistenceCorruptionError as e:
            logger.warning("Ignoring corrupt category data: %s", e)
            return []


class SettingsStore:
    """Read-only access to the application settings."""

    def __init__(self, store: KeyValueStore, key: str = SETTINGS_KEY):
        self.store = store
        self.key = key

    def load(self) -> AppSettings:
        """Load settings; missing or corrupt data yields the defaults."""
        try:
            document = _read_document(self.store, self.key)
            if document is None:
                return AppSettings()
            return settings_from_record(document)
        except PersistenceCorruptionError as e:
            logger.warning("Ignoring corrupt settings data: %s", e)
            return AppSettings()
