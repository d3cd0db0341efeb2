"""Utility functions for cashbook."""

from cashbook.utils.date_parser import parse_date, parse_iso_date
from cashbook.utils.amount_parser import parse_amount
from cashbook.utils.formatting import format_amount, format_balance
from cashbook.utils.category_resolver import resolve_category

__all__ = [
    "parse_date",
    "parse_iso_date",
    "parse_amount",
    "format_amount",
    "format_balance",
    "resolve_category",
]
