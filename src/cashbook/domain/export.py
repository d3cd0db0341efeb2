"""Export adapter interface consumed by the ledger controller."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

from cashbook.domain.entities import (
    AccountingCategory,
    AppSettings,
    CashEntry,
    NetBalance,
)


@dataclass(frozen=True)
class LedgerView:
    """Snapshot of a ledger view that an adapter can render."""

    title: str
    entries: tuple[CashEntry, ...]
    totals: NetBalance
    settings: AppSettings = field(default_factory=AppSettings)
    categories: tuple[AccountingCategory, ...] = ()
    generated_on: str = field(default_factory=lambda: date.today().isoformat())


class ExportAdapter(ABC):
    """Renders a view to an image file.

    Exports may be slow and may fail; implementations raise on failure.
    """

    @abstractmethod
    async def export_as_image(self, render_target: LedgerView, filename: str) -> Path:
        """Render the target and save it as filename.

        Returns:
            Path of the written image
        """
        pass


def default_export_basename(prefix: str = "cash-journal", today: Optional[date] = None) -> str:
    """Build an export file base name embedding the calendar date.

    Example: "cash-journal-2024-01-15"
    """
    if today is None:
        today = date.today()
    return f"{prefix}-{today.isoformat()}"
