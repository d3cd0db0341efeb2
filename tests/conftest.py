"""Shared pytest fixtures for cashbook tests."""

import json
import os
import tempfile
from decimal import Decimal

import pytest

from cashbook.database.factories import create_sqlite_store
from cashbook.database.stores import CATEGORIES_KEY, SETTINGS_KEY, EntryStore
from cashbook.domain.entities import CashEntry, EntryDraft
from cashbook.domain.ledger import LedgerController


def make_entry(entry_id: str, date: str = "2024-01-01", statement: str = "Entry", **fields) -> CashEntry:
    """Build a CashEntry with zero amounts unless given."""
    amounts = {
        key: Decimal(str(fields.pop(key, 0)))
        for key in ("received_primary", "paid_primary", "received_secondary", "paid_secondary")
    }
    return CashEntry(id=entry_id, date=date, statement=statement, **fields, **amounts)


def make_draft(statement: str = "Entry", date: str = "2024-01-01", **fields) -> EntryDraft:
    """Build an EntryDraft with zero amounts unless given."""
    for key in ("received_primary", "paid_primary", "received_secondary", "paid_secondary"):
        if key in fields:
            fields[key] = Decimal(str(fields[key]))
    return EntryDraft(date=date, statement=statement, **fields)


@pytest.fixture
def temp_store():
    """Create a temporary SQLite key-value store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def entry_store(temp_store):
    """Create an EntryStore over the temporary store."""
    return EntryStore(temp_store)


@pytest.fixture
def controller(entry_store):
    """Create a LedgerController over an empty journal."""
    return LedgerController(entry_store)


@pytest.fixture
def sample_entries():
    """A small journal, newest first."""
    return [
        make_entry("e3", "2024-03-10", "Client payment", notes="Invoice 17", received_secondary=300),
        make_entry("e2", "2024-02-05", "Office rent", category_id="cat-rent", paid_primary=250000),
        make_entry("e1", "2024-01-01", "Opening balance", received_primary=1000000, received_secondary=50),
    ]


@pytest.fixture
def seeded_controller(entry_store, sample_entries):
    """Create a LedgerController over the sample journal."""
    entry_store.save(sample_entries)
    return LedgerController(entry_store)


@pytest.fixture
def reference_data(temp_store):
    """Store categories and settings the way the settings screens write them."""
    categories = [
        {"id": "cat-rent", "name": "Rent", "type": "expense"},
        {"id": "cat-sales", "name": "Sales", "type": "income", "notes": "Shop sales"},
    ]
    settings = {
        "companyName": "Sheno Trading",
        "currency": "SYP",
        "currencySymbol": "ل.س",
        "secondaryCurrency": "USD",
        "secondaryCurrencySymbol": "$",
    }
    temp_store.set(CATEGORIES_KEY, json.dumps(categories))
    temp_store.set(SETTINGS_KEY, json.dumps(settings))
    return {"categories": categories, "settings": settings}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
