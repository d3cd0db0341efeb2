"""Entry filtering.

Dates are ISO-8601 strings, so plain string comparison orders them
chronologically.
"""

from typing import Iterable, Optional

from cashbook.domain.entities import CashEntry


def matches(
    entry: CashEntry,
    search_text: Optional[str] = "",
    start_date: Optional[str] = "",
    end_date: Optional[str] = "",
) -> bool:
    """Check whether an entry satisfies the search and date bounds."""
    if search_text:
        needle = search_text.casefold()
        if needle not in entry.statement.casefold() and needle not in (entry.notes or "").casefold():
            return False
    if start_date and entry.date < start_date:
        return False
    if end_date and entry.date > end_date:
        return False
    return True


def filter_entries(
    entries: Iterable[CashEntry],
    search_text: Optional[str] = "",
    start_date: Optional[str] = "",
    end_date: Optional[str] = "",
) -> list[CashEntry]:
    """Select the entries matching a search text and an inclusive date range.

    Args:
        entries: Entries in display order
        search_text: Case-insensitive substring of statement or notes; empty matches all
        start_date: Inclusive lower bound (YYYY-MM-DD); empty means unbounded
        end_date: Inclusive upper bound (YYYY-MM-DD); empty means unbounded

    Returns:
        Matching entries in their original relative order
    """
    return [e for e in entries if matches(e, search_text, start_date, end_date)]


def entries_for_category(entries: Iterable[CashEntry], category_id: str) -> list[CashEntry]:
    """Return the entries tagged with a category, in their original order."""
    return [e for e in entries if e.category_id == category_id]
