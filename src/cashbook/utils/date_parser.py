"""Date parsing utilities.

The ledger stores dates as ISO-8601 strings; these helpers turn user input
into that form.
"""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def _period_start(period: str, today: date) -> Optional[date]:
    """Return the first day of "this/last/next <period>", or None."""
    starts = {
        "month": today.replace(day=1),
        "year": today.replace(month=1, day=1),
        "week": today - timedelta(days=today.weekday()),
    }
    steps = {
        "month": relativedelta(months=1),
        "year": relativedelta(years=1),
        "week": timedelta(days=7),
    }
    for prefix, direction in (("this ", 0), ("last ", -1), ("next ", 1)):
        if period.startswith(prefix):
            unit = period[len(prefix):]
            if unit in starts:
                return starts[unit] + steps[unit] * direction
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones ("today", "yesterday", "tomorrow", "this month", "last week",
    "next year"; periods resolve to their first day).

    Args:
        date_str: Date string in various formats
        today: Reference date for relative forms (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    period_start = _period_start(date_str, today)
    if period_start is not None:
        return period_start

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_iso_date(date_str: Optional[str], today: Optional[date] = None) -> str:
    """Parse user input into a YYYY-MM-DD string; empty input stays empty."""
    if date_str is None or not date_str.strip():
        return ""
    return parse_date(date_str, today=today).isoformat()
