"""Balance aggregation over cash entries."""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from cashbook.domain.entities import (
    AccountingCategory,
    CashEntry,
    CategoryBalance,
    DailyBalance,
    NetBalance,
    UNCATEGORIZED_LABEL,
)


def aggregate(entries: Iterable[CashEntry]) -> NetBalance:
    """Compute net balances for both currencies in a single pass.

    The primary and secondary currencies are summed independently; no
    conversion or rounding is applied.
    """
    net_primary = Decimal("0")
    net_secondary = Decimal("0")
    for entry in entries:
        net_primary += entry.received_primary - entry.paid_primary
        net_secondary += entry.received_secondary - entry.paid_secondary
    return NetBalance(net_primary=net_primary, net_secondary=net_secondary)


def daily_balances(entries: Iterable[CashEntry]) -> list[DailyBalance]:
    """Group entries by date and sum each day's movements.

    Returns:
        One DailyBalance per distinct date, newest date first
    """
    totals: dict[str, list[Decimal]] = {}
    for entry in entries:
        day = totals.setdefault(entry.date, [Decimal("0")] * 4)
        day[0] += entry.received_primary
        day[1] += entry.paid_primary
        day[2] += entry.received_secondary
        day[3] += entry.paid_secondary

    return [
        DailyBalance(
            date=day,
            received_primary=amounts[0],
            paid_primary=amounts[1],
            received_secondary=amounts[2],
            paid_secondary=amounts[3],
        )
        for day, amounts in sorted(totals.items(), key=lambda item: item[0], reverse=True)
    ]


def category_label(
    category_id: Optional[str], categories: Sequence[AccountingCategory]
) -> str:
    """Resolve a category id to its name; missing or dangling ids are uncategorized."""
    if category_id:
        for category in categories:
            if category.id == category_id:
                return category.name
    return UNCATEGORIZED_LABEL


def category_balances(
    entries: Iterable[CashEntry], categories: Sequence[AccountingCategory]
) -> list[CategoryBalance]:
    """Compute net balances per category.

    Entries without a category, or whose category no longer exists, are
    collected into a single uncategorized bucket (category_id None), which
    is listed last. Known categories keep the order of `categories`.
    """
    known = {c.id for c in categories}
    buckets: dict[Optional[str], list[CashEntry]] = {}
    for entry in entries:
        key = entry.category_id if entry.category_id in known else None
        buckets.setdefault(key, []).append(entry)

    ordered_keys: list[Optional[str]] = [c.id for c in categories if c.id in buckets]
    if None in buckets:
        ordered_keys.append(None)

    results = []
    for key in ordered_keys:
        bucket = buckets[key]
        balance = aggregate(bucket)
        results.append(
            CategoryBalance(
                category_id=key,
                label=category_label(key, categories),
                entry_count=len(bucket),
                net_primary=balance.net_primary,
                net_secondary=balance.net_secondary,
            )
        )
    return results
