"""Display formatting for amounts and balances."""

from decimal import Decimal

from cashbook.domain.entities import AppSettings, NetBalance


def format_amount(amount: Decimal, blank_zero: bool = False) -> str:
    """Format an amount with thousands separators.

    Args:
        amount: Amount to format
        blank_zero: Render zero as "-" (used in received/paid columns)
    """
    if blank_zero and amount == 0:
        return "-"
    # Whole amounts print without decimals
    normalized = amount.normalize() if amount == amount.to_integral_value() else amount
    return f"{normalized:,f}"


def format_balance(balance: NetBalance, settings: AppSettings) -> tuple[str, str]:
    """Format a net balance for both currencies using the display settings."""
    return (
        f"{format_amount(balance.net_primary)} {settings.primary_currency_symbol}",
        f"{format_amount(balance.net_secondary)} {settings.secondary_currency_symbol}",
    )
