"""Balance reporting commands."""

import click

from cashbook.cli.date_filters import resolve_cli_date_range
from cashbook.database.stores import CategoryStore, EntryStore, SettingsStore
from cashbook.domain.aggregation import category_balances, daily_balances
from cashbook.domain.ledger import LedgerController
from cashbook.utils.formatting import format_amount, format_balance


@click.command("balance")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--search", default="", help="Text to find in statement or notes (case-insensitive)")
@click.option("--daily", is_flag=True, help="Break the balance down by day, newest first")
@click.option("--by-category", is_flag=True, help="Break the balance down by category")
@click.pass_context
def show_balance(
    ctx, start_date: str | None, end_date: str | None, search: str, daily: bool, by_category: bool
):
    """Show the net balance of each currency.

    Examples:
        cashbook balance
        cashbook balance --start-date "this month" --daily
        cashbook balance --by-category
    """
    store = ctx.obj["store"]
    controller = LedgerController(EntryStore(store))
    settings = SettingsStore(store).load()

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)
    entries = controller.filter(search, start, end)

    primary = settings.primary_currency
    secondary = settings.secondary_currency

    if daily:
        days = daily_balances(entries)
        if not days:
            click.echo("No entries found.")
            return
        click.echo(
            f"{'Date':<12} {'In ' + primary:>14} {'Out ' + primary:>14} {'Net ' + primary:>14} "
            f"{'In ' + secondary:>12} {'Out ' + secondary:>12} {'Net ' + secondary:>12}"
        )
        click.echo("-" * 100)
        for day in days:
            click.echo(
                f"{day.date:<12} {format_amount(day.received_primary):>14} "
                f"{format_amount(day.paid_primary):>14} {format_amount(day.net_primary):>14} "
                f"{format_amount(day.received_secondary):>12} "
                f"{format_amount(day.paid_secondary):>12} {format_amount(day.net_secondary):>12}"
            )
        click.echo("-" * 100)

    if by_category:
        categories = CategoryStore(store).load()
        rows = category_balances(entries, categories)
        if not rows:
            click.echo("No entries found.")
            return
        click.echo(f"{'Category':<30} {'Entries':>8} {'Net ' + primary:>16} {'Net ' + secondary:>14}")
        click.echo("-" * 72)
        for row in rows:
            click.echo(
                f"{row.label[:30]:<30} {row.entry_count:>8} "
                f"{format_amount(row.net_primary):>16} {format_amount(row.net_secondary):>14}"
            )
        click.echo("-" * 72)

    net_primary, net_secondary = format_balance(controller.aggregate(entries), settings)
    click.echo(f"Net {primary}: {net_primary}")
    click.echo(f"Net {secondary}: {net_secondary}")


def register_commands(cli):
    """Register balance command with main CLI."""
    cli.add_command(show_balance)
