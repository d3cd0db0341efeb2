"""CSV export of ledger entries."""

import csv
from pathlib import Path
from typing import Iterable, Sequence

from cashbook.domain.aggregation import category_label
from cashbook.domain.entities import AccountingCategory, AppSettings, CashEntry


def csv_headers(settings: AppSettings) -> list[str]:
    """Column headers, with amount columns named after the currencies."""
    primary = settings.primary_currency
    secondary = settings.secondary_currency
    return [
        "Date",
        "Statement",
        "Category",
        f"Received ({primary})",
        f"Paid ({primary})",
        f"Received ({secondary})",
        f"Paid ({secondary})",
        "Notes",
    ]


def write_entries_csv(
    entries: Iterable[CashEntry],
    path: str | Path,
    categories: Sequence[AccountingCategory] = (),
    settings: AppSettings | None = None,
) -> int:
    """Write entries to a CSV file readable by spreadsheet software.

    The file is UTF-8 with a byte order mark, every cell is quoted, and rows
    end with CRLF.

    Returns:
        Number of entry rows written
    """
    settings = settings or AppSettings()
    path = Path(path)
    count = 0
    with open(path, "w", encoding="utf-8-sig", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
        writer.writerow(csv_headers(settings))
        for entry in entries:
            writer.writerow(
                [
                    entry.date,
                    entry.statement,
                    category_label(entry.category_id, categories),
                    str(entry.received_primary),
                    str(entry.paid_primary),
                    str(entry.received_secondary),
                    str(entry.paid_secondary),
                    entry.notes,
                ]
            )
            count += 1
    return count
