"""Domain model entities for cashbook.

These are pure data classes representing business concepts, independent of
how they are serialized. Amounts are Decimals so that sums are exact and
independent of summation order.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

AMOUNT_FIELDS = (
    "received_primary",
    "paid_primary",
    "received_secondary",
    "paid_secondary",
)

UNCATEGORIZED_LABEL = "Uncategorized"


def today_iso() -> str:
    """Return today's date as an ISO-8601 string."""
    return date.today().isoformat()


class CategoryType(str, Enum):
    """Kind of an accounting category."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class CashEntry:
    """One recorded cash movement in two currencies."""

    id: str
    date: str
    statement: str
    notes: str = ""
    category_id: Optional[str] = None
    received_primary: Decimal = Decimal("0")
    paid_primary: Decimal = Decimal("0")
    received_secondary: Decimal = Decimal("0")
    paid_secondary: Decimal = Decimal("0")

    @property
    def net_primary(self) -> Decimal:
        return self.received_primary - self.paid_primary

    @property
    def net_secondary(self) -> Decimal:
        return self.received_secondary - self.paid_secondary


@dataclass
class EntryDraft:
    """User-supplied fields of an entry that is being composed.

    A draft has no id: the controller assigns one when the draft is added, or
    keeps the existing one when the draft is applied as an edit.
    """

    date: str = field(default_factory=today_iso)
    statement: str = ""
    notes: str = ""
    category_id: Optional[str] = None
    received_primary: Decimal = Decimal("0")
    paid_primary: Decimal = Decimal("0")
    received_secondary: Decimal = Decimal("0")
    paid_secondary: Decimal = Decimal("0")

    @classmethod
    def from_entry(cls, entry: CashEntry) -> "EntryDraft":
        """Create a draft pre-filled with an existing entry's fields."""
        return cls(
            date=entry.date,
            statement=entry.statement,
            notes=entry.notes,
            category_id=entry.category_id,
            received_primary=entry.received_primary,
            paid_primary=entry.paid_primary,
            received_secondary=entry.received_secondary,
            paid_secondary=entry.paid_secondary,
        )

    def to_entry(self, entry_id: str) -> CashEntry:
        """Materialize the draft as an entry with the given id."""
        return CashEntry(
            id=entry_id,
            date=self.date,
            statement=self.statement,
            notes=self.notes or "",
            category_id=self.category_id or None,
            received_primary=self.received_primary,
            paid_primary=self.paid_primary,
            received_secondary=self.received_secondary,
            paid_secondary=self.paid_secondary,
        )

    def copy(self) -> "EntryDraft":
        return replace(self)


@dataclass(frozen=True)
class AccountingCategory:
    """Category that entries can be tagged with (read-only reference data)."""

    id: str
    name: str
    type: CategoryType
    notes: str = ""


@dataclass(frozen=True)
class AppSettings:
    """Currency display settings (read-only reference data)."""

    company_name: str = ""
    primary_currency: str = "SYP"
    primary_currency_symbol: str = "ل.س"
    secondary_currency: str = "USD"
    secondary_currency_symbol: str = "$"


@dataclass(frozen=True)
class NetBalance:
    """Net received-minus-paid per currency over a set of entries."""

    net_primary: Decimal = Decimal("0")
    net_secondary: Decimal = Decimal("0")


@dataclass(frozen=True)
class DailyBalance:
    """Summed movements of a single calendar day."""

    date: str
    received_primary: Decimal
    paid_primary: Decimal
    received_secondary: Decimal
    paid_secondary: Decimal

    @property
    def net_primary(self) -> Decimal:
        return self.received_primary - self.paid_primary

    @property
    def net_secondary(self) -> Decimal:
        return self.received_secondary - self.paid_secondary


@dataclass(frozen=True)
class CategoryBalance:
    """Net balances of the entries tagged with one category."""

    category_id: Optional[str]
    label: str
    entry_count: int
    net_primary: Decimal
    net_secondary: Decimal
