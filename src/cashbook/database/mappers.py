"""Mapper functions to convert between domain entities and stored records.

This layer isolates the serialization format, so a schema version or a new
field only needs changes here and not in the stores or the controller.
Records use the camelCase keys of the stored JSON documents.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from cashbook.domain import entities as domain
from cashbook.domain.errors import PersistenceCorruptionError

AMOUNT_KEYS = {
    "received_primary": ("receivedPrimary", "receivedSYP"),
    "paid_primary": ("paidPrimary", "paidSYP"),
    "received_secondary": ("receivedSecondary", "receivedUSD"),
    "paid_secondary": ("paidSecondary", "paidUSD"),
}

# Category types as stored by the original Arabic-language interface
LEGACY_CATEGORY_TYPES = {
    "إيرادات": domain.CategoryType.INCOME,
    "مصروفات": domain.CategoryType.EXPENSE,
}


def _require_str(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    if not isinstance(value, str):
        raise PersistenceCorruptionError(f"Record field '{key}' is missing or not a string")
    return value


def _parse_amount(value: Any, key: str) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise PersistenceCorruptionError(f"Record field '{key}' is not a number")
    try:
        # str() keeps floats at their shortest repr instead of binary expansion
        amount = Decimal(str(value))
    except InvalidOperation:
        raise PersistenceCorruptionError(f"Record field '{key}' is not a number: {value!r}")
    if not amount.is_finite():
        raise PersistenceCorruptionError(f"Record field '{key}' is not finite: {value!r}")
    return amount


def entry_to_record(entry: domain.CashEntry) -> dict[str, Any]:
    """Convert a CashEntry to a JSON-compatible record.

    Amounts are written as decimal strings so that loading yields exactly
    the same values.
    """
    record: dict[str, Any] = {
        "id": entry.id,
        "date": entry.date,
        "statement": entry.statement,
        "notes": entry.notes,
    }
    if entry.category_id is not None:
        record["categoryId"] = entry.category_id
    for field_name, (key, _legacy) in AMOUNT_KEYS.items():
        record[key] = str(getattr(entry, field_name))
    return record


def entry_from_record(record: Any) -> domain.CashEntry:
    """Convert a stored record to a CashEntry.

    Accepts the legacy currency-named amount keys and plain JSON numbers.

    Raises:
        PersistenceCorruptionError: If the record is malformed
    """
    if not isinstance(record, Mapping):
        raise PersistenceCorruptionError("Entry record is not an object")

    amounts = {}
    for field_name, keys in AMOUNT_KEYS.items():
        value = None
        for key in keys:
            if key in record:
                value = record[key]
                break
        amounts[field_name] = _parse_amount(value, keys[0])

    notes = record.get("notes")
    category_id = record.get("categoryId")
    return domain.CashEntry(
        id=_require_str(record, "id"),
        date=_require_str(record, "date"),
        statement=_require_str(record, "statement"),
        notes=notes if isinstance(notes, str) else "",
        category_id=category_id if isinstance(category_id, str) else None,
        **amounts,
    )


def category_from_record(record: Any) -> domain.AccountingCategory:
    """Convert a stored record to an AccountingCategory.

    Raises:
        PersistenceCorruptionError: If the record is malformed
    """
    if not isinstance(record, Mapping):
        raise PersistenceCorruptionError("Category record is not an object")

    raw_type = record.get("type", domain.CategoryType.EXPENSE.value)
    if raw_type in LEGACY_CATEGORY_TYPES:
        category_type = LEGACY_CATEGORY_TYPES[raw_type]
    else:
        try:
            category_type = domain.CategoryType(raw_type)
        except ValueError:
            raise PersistenceCorruptionError(f"Unknown category type {raw_type!r}")

    notes = record.get("notes")
    return domain.AccountingCategory(
        id=_require_str(record, "id"),
        name=_require_str(record, "name"),
        type=category_type,
        notes=notes if isinstance(notes, str) else "",
    )


def settings_from_record(record: Any) -> domain.AppSettings:
    """Convert a stored settings record to AppSettings.

    Missing fields fall back to the AppSettings defaults.

    Raises:
        PersistenceCorruptionError: If the record is not an object
    """
    if not isinstance(record, Mapping):
        raise PersistenceCorruptionError("Settings record is not an object")

    defaults = domain.AppSettings()
    values = {}
    for attr, key in (
        ("company_name", "companyName"),
        ("primary_currency", "currency"),
        ("primary_currency_symbol", "currencySymbol"),
        ("secondary_currency", "secondaryCurrency"),
        ("secondary_currency_symbol", "secondaryCurrencySymbol"),
    ):
        value = record.get(key)
        values[attr] = value if isinstance(value, str) and value else getattr(defaults, attr)
    return domain.AppSettings(**values)
