"""Tests for the key-value store and the entry, category and settings stores."""

import json
import logging
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from cashbook.database.stores import (
    CATEGORIES_KEY,
    ENTRIES_KEY,
    SETTINGS_KEY,
    CategoryStore,
    EntryStore,
    SettingsStore,
)
from cashbook.domain.entities import AppSettings, CategoryType
from cashbook.domain.errors import PersistenceError

from conftest import make_entry


class TestKeyValueStore:
    """Tests for the SQLAlchemy key-value store."""

    def test_get_missing_key_returns_none(self, temp_store):
        assert temp_store.get("missing") is None

    def test_set_and_get(self, temp_store):
        temp_store.set("greeting", "مرحبا")
        assert temp_store.get("greeting") == "مرحبا"

    def test_set_replaces_value(self, temp_store):
        temp_store.set("key", "first")
        temp_store.set("key", "second")
        assert temp_store.get("key") == "second"
        assert temp_store.keys() == ["key"]

    def test_delete(self, temp_store):
        temp_store.set("key", "value")
        temp_store.delete("key")
        temp_store.delete("key")
        assert temp_store.get("key") is None
        assert temp_store.keys() == []

    def test_keys_sorted(self, temp_store):
        temp_store.set("b", "2")
        temp_store.set("a", "1")
        assert temp_store.keys() == ["a", "b"]

    def test_value_visible_to_second_connection(self, temp_store):
        from cashbook.database.factories import create_sqlite_store

        other = create_sqlite_store(database_path=temp_store.database_path)
        try:
            assert other.get("key") is None
            temp_store.set("key", "value")
            assert other.get("key") == "value"
        finally:
            other.disconnect()

    def test_env_var_selects_database(self, tmp_path, monkeypatch):
        from cashbook.database.factories import create_sqlite_store

        db_path = tmp_path / "env.db"
        monkeypatch.setenv("CASHBOOK_DB_PATH", str(db_path))
        store = create_sqlite_store()
        try:
            assert store.database_url == f"sqlite:///{db_path}"
        finally:
            store.disconnect()


class TestEntryStore:
    """Tests for EntryStore load/save."""

    def test_load_empty_store(self, entry_store):
        assert entry_store.load() == []

    def test_round_trip_preserves_entries_and_order(self, entry_store, sample_entries):
        entry_store.save(sample_entries)
        assert entry_store.load() == sample_entries

    def test_round_trip_exact_decimals(self, entry_store):
        entries = [
            make_entry("a", received_primary=Decimal("0.1"), paid_secondary=Decimal("12.50")),
            make_entry("b", paid_primary=Decimal("1234567890.123456789")),
        ]
        entry_store.save(entries)
        loaded = entry_store.load()
        assert loaded == entries
        assert str(loaded[0].paid_secondary) == "12.50"

    def test_round_trip_empty_collection(self, entry_store, sample_entries):
        entry_store.save(sample_entries)
        entry_store.save([])
        assert entry_store.load() == []

    def test_round_trip_unicode_and_optional_fields(self, entry_store):
        entries = [
            make_entry("a", statement="دفعة إيجار", notes="", category_id=None),
            make_entry("b", statement="Dangling", category_id="deleted-category"),
        ]
        entry_store.save(entries)
        assert entry_store.load() == entries

    def test_round_trip_empty_category_and_notes(self, entry_store):
        entries = [make_entry("a", notes="", category_id=""), make_entry("b", notes="", category_id=None)]
        entry_store.save(entries)
        assert entry_store.load() == entries

    def test_save_failure_raises_persistence_error(self, temp_store, monkeypatch):
        def locked(key, value):
            raise OperationalError("UPDATE records", {}, Exception("database is locked"))

        monkeypatch.setattr(temp_store, "set", locked)
        with pytest.raises(PersistenceError, match="Could not save 'sheno_cash_journal'"):
            EntryStore(temp_store).save([make_entry("a")])

    def test_uses_original_storage_keys(self):
        assert ENTRIES_KEY == "sheno_cash_journal"
        assert CATEGORIES_KEY == "sheno_accounting_categories"
        assert SETTINGS_KEY == "sheno_settings"

    def test_save_writes_single_document(self, temp_store, entry_store, sample_entries):
        entry_store.save(sample_entries)
        assert temp_store.keys() == [ENTRIES_KEY]
        document = json.loads(temp_store.get(ENTRIES_KEY))
        assert [record["id"] for record in document] == ["e3", "e2", "e1"]
        assert document[1]["paidPrimary"] == "250000"
        assert document[1]["categoryId"] == "cat-rent"

    def test_custom_key(self, temp_store, sample_entries):
        store = EntryStore(temp_store, key="archive_2023")
        store.save(sample_entries)
        assert temp_store.get(ENTRIES_KEY) is None
        assert store.load() == sample_entries

    @pytest.mark.parametrize(
        "blob",
        [
            "not json",
            "{\"id\": \"a\"}",
            "[1, 2, 3]",
            "[{\"id\": \"a\", \"date\": \"2024-01-01\"}]",
            "[{\"id\": \"a\", \"date\": \"2024-01-01\", \"statement\": \"x\", \"paidPrimary\": \"lots\"}]",
            "[{\"id\": \"a\", \"date\": \"2024-01-01\", \"statement\": \"x\", \"paidPrimary\": \"NaN\"}]",
            "[{\"id\": \"a\", \"date\": \"2024-01-01\", \"statement\": \"x\", \"paidPrimary\": true}]",
        ],
    )
    def test_corrupt_data_loads_empty(self, temp_store, entry_store, blob, caplog):
        temp_store.set(ENTRIES_KEY, blob)
        with caplog.at_level(logging.WARNING, logger="cashbook.database.stores"):
            assert entry_store.load() == []
        assert "corrupt ledger data" in caplog.text

    def test_loads_legacy_records(self, temp_store, entry_store):
        legacy = [
            {
                "id": "legacy-1",
                "date": "2023-12-31",
                "statement": "قيد قديم",
                "receivedSYP": 1500,
                "paidSYP": 0,
                "receivedUSD": 0,
                "paidUSD": 12.5,
                "notes": "",
                "categoryId": "",
            }
        ]
        temp_store.set(ENTRIES_KEY, json.dumps(legacy))

        entries = entry_store.load()

        assert len(entries) == 1
        entry = entries[0]
        assert entry.received_primary == Decimal("1500")
        assert entry.paid_secondary == Decimal("12.5")
        assert entry.category_id is None

    def test_missing_amounts_default_to_zero(self, temp_store, entry_store):
        temp_store.set(
            ENTRIES_KEY,
            json.dumps([{"id": "a", "date": "2024-01-01", "statement": "x"}]),
        )
        entry = entry_store.load()[0]
        assert entry.received_primary == Decimal("0")
        assert entry.notes == ""

    def test_duplicate_ids_keep_first(self, entry_store, caplog):
        first = make_entry("same", statement="First")
        second = make_entry("same", statement="Second")
        entry_store.save([first, second])

        with caplog.at_level(logging.WARNING, logger="cashbook.database.stores"):
            assert entry_store.load() == [first]
        assert "duplicate id" in caplog.text


class TestCategoryStore:
    """Tests for the read-only category store."""

    def test_load_missing(self, temp_store):
        assert CategoryStore(temp_store).load() == []

    def test_load_categories(self, temp_store, reference_data):
        categories = CategoryStore(temp_store).load()
        assert [c.name for c in categories] == ["Rent", "Sales"]
        assert categories[0].type == CategoryType.EXPENSE
        assert categories[1].type == CategoryType.INCOME
        assert categories[1].notes == "Shop sales"

    def test_load_legacy_category_types(self, temp_store):
        temp_store.set(
            CATEGORIES_KEY,
            json.dumps(
                [
                    {"id": "1", "name": "رواتب", "type": "مصروفات"},
                    {"id": "2", "name": "مبيعات", "type": "إيرادات"},
                ]
            ),
        )
        categories = CategoryStore(temp_store).load()
        assert [c.type for c in categories] == [CategoryType.EXPENSE, CategoryType.INCOME]

    def test_corrupt_categories_load_empty(self, temp_store):
        temp_store.set(CATEGORIES_KEY, json.dumps([{"id": "1", "name": "x", "type": "other"}]))
        assert CategoryStore(temp_store).load() == []


class TestSettingsStore:
    """Tests for the read-only settings store."""

    def test_defaults_when_missing(self, temp_store):
        assert SettingsStore(temp_store).load() == AppSettings()

    def test_load_settings(self, temp_store, reference_data):
        settings = SettingsStore(temp_store).load()
        assert settings.company_name == "Sheno Trading"
        assert settings.primary_currency == "SYP"
        assert settings.secondary_currency_symbol == "$"

    def test_partial_settings_use_defaults(self, temp_store):
        temp_store.set(SETTINGS_KEY, json.dumps({"currency": "EUR", "currencySymbol": "€"}))
        settings = SettingsStore(temp_store).load()
        assert settings.primary_currency == "EUR"
        assert settings.secondary_currency == "USD"

    def test_corrupt_settings_use_defaults(self, temp_store):
        temp_store.set(SETTINGS_KEY, "[]")
        assert SettingsStore(temp_store).load() == AppSettings()
