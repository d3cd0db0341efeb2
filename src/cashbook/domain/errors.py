"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class LedgerBusyError(DomainError):
    """Operation refused because an export is in flight."""


class ExportError(DomainError):
    """Rendering or saving an exported view failed."""


class PersistenceCorruptionError(DomainError):
    """Stored data could not be decoded into domain entities."""


class PersistenceError(DomainError):
    """The key-value store refused a write."""


def entry_not_found(entry_id: str) -> str:
    """Return message for missing cash entry."""
    return f"Entry {entry_id} not found"


def statement_required() -> str:
    """Return message for an entry without a statement."""
    return "Statement is required"


def invalid_entry_date(value: str) -> str:
    """Return message for a date that is not YYYY-MM-DD."""
    return f"Invalid date '{value}': expected YYYY-MM-DD"


def negative_amount(field_name: str, amount) -> str:
    """Return message for a negative amount field."""
    return f"Amount '{field_name}' must not be negative (got {amount})"


def ledger_busy() -> str:
    """Return message when an export blocks other operations."""
    return "An export is in progress; try again when it finishes"


def save_failed(key: str, reason: object) -> str:
    """Return message for a write the store did not accept."""
    return f"Could not save '{key}': {reason}"


def journal_not_saved() -> str:
    """Return message for a mutation dropped because saving failed."""
    return "The journal could not be saved; the change was not applied"


def export_failed(filename: str, reason: object) -> str:
    """Return message for a failed image export."""
    return f"Failed to export '{filename}': {reason}"
