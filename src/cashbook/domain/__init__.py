"""Domain layer for cashbook application."""

from cashbook.domain.aggregation import aggregate, daily_balances, category_balances
from cashbook.domain.filtering import filter_entries, entries_for_category
from cashbook.domain.ledger import LedgerController, LedgerState

__all__ = [
    "LedgerController",
    "LedgerState",
    "aggregate",
    "daily_balances",
    "category_balances",
    "filter_entries",
    "entries_for_category",
]
