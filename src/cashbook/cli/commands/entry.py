"""Cash entry management commands."""

import click

from cashbook.cli.category_resolution import resolve_category_or_exit
from cashbook.cli.date_filters import resolve_cli_date_range
from cashbook.cli.error_handling import handle_domain_error
from cashbook.database.stores import CategoryStore, EntryStore, SettingsStore
from cashbook.domain.aggregation import category_label
from cashbook.domain.entities import CashEntry, EntryDraft
from cashbook.domain.errors import DomainError, entry_not_found, journal_not_saved
from cashbook.domain.filtering import entries_for_category
from cashbook.domain.ledger import LedgerController
from cashbook.utils.amount_parser import parse_amount
from cashbook.utils.date_parser import parse_iso_date
from cashbook.utils.formatting import format_amount, format_balance

AMOUNT_OPTIONS = (
    ("received_primary", "--received-primary", "Amount received in the primary currency"),
    ("paid_primary", "--paid-primary", "Amount paid in the primary currency"),
    ("received_secondary", "--received-secondary", "Amount received in the secondary currency"),
    ("paid_secondary", "--paid-secondary", "Amount paid in the secondary currency"),
)


def entry_field_options(func):
    """Attach the options shared by add and edit."""
    for field_name, flag, help_text in reversed(AMOUNT_OPTIONS):
        func = click.option(flag, field_name, help=help_text)(func)
    func = click.option("--category", help="Category name or ID ('' for none)")(func)
    func = click.option("--notes", help="Notes")(func)
    func = click.option(
        "--date", "entry_date",
        help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday')",
    )(func)
    return func


def apply_options_to_draft(ctx, draft: EntryDraft, categories, options: dict) -> None:
    """Copy provided CLI options onto a draft, exiting on malformed input."""
    if options["entry_date"] is not None:
        try:
            draft.date = parse_iso_date(options["entry_date"])
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    if options.get("statement") is not None:
        draft.statement = options["statement"]
    if options["notes"] is not None:
        draft.notes = options["notes"]
    if options["category"] is not None:
        draft.category_id = resolve_category_or_exit(ctx, categories, options["category"])

    for field_name, flag, _help in AMOUNT_OPTIONS:
        value = options[field_name]
        if value is None:
            continue
        try:
            setattr(draft, field_name, parse_amount(value))
        except ValueError as e:
            click.echo(f"Error: Invalid amount for {flag}: {e}", err=True)
            ctx.exit(1)


def echo_entry(entry: CashEntry, categories, settings) -> None:
    primary = settings.primary_currency_symbol
    secondary = settings.secondary_currency_symbol
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  Statement: {entry.statement}")
    click.echo(f"  Category: {category_label(entry.category_id, categories)}")
    click.echo(
        f"  {primary}: +{format_amount(entry.received_primary)} / -{format_amount(entry.paid_primary)}"
    )
    click.echo(
        f"  {secondary}: +{format_amount(entry.received_secondary)} / -{format_amount(entry.paid_secondary)}"
    )
    if entry.notes:
        click.echo(f"  Notes: {entry.notes}")


@click.group()
def entry_group():
    """Manage cash journal entries."""
    pass


@entry_group.command("add")
@click.option("--statement", required=True, help="Description of the movement")
@entry_field_options
@click.pass_context
def add_entry(ctx, **options):
    """Add an entry to the top of the journal.

    Examples:
        cashbook entry add --statement "Office rent" --paid-primary 250000
        cashbook entry add --statement "Client payment" --date 2024-01-15 --received-secondary 300
    """
    store = ctx.obj["store"]
    controller = LedgerController(EntryStore(store))
    categories = CategoryStore(store).load()
    settings = SettingsStore(store).load()

    draft = controller.start_add()
    apply_options_to_draft(ctx, draft, categories, options)

    try:
        entry = controller.submit()
    except DomainError as e:
        handle_domain_error(ctx, e)
    if entry is None:
        click.echo(f"Error: {journal_not_saved()}", err=True)
        ctx.exit(1)

    click.echo(f"Created entry {entry.id}")
    echo_entry(entry, categories, settings)


@entry_group.command("edit")
@click.argument("entry_id")
@click.option("--statement", help="Description of the movement")
@entry_field_options
@click.pass_context
def edit_entry(ctx, entry_id: str, **options):
    """Edit an entry.

    Updates only the fields that are provided. Use --category "" to clear the category.

    Examples:
        cashbook entry edit 3f2a... --paid-primary 275000
        cashbook entry edit 3f2a... --category ""
    """
    store = ctx.obj["store"]
    controller = LedgerController(EntryStore(store))
    categories = CategoryStore(store).load()
    settings = SettingsStore(store).load()

    draft = controller.start_edit(entry_id)
    if draft is None:
        click.echo(f"Error: {entry_not_found(entry_id)}", err=True)
        ctx.exit(1)

    apply_options_to_draft(ctx, draft, categories, options)

    try:
        entry = controller.submit()
    except DomainError as e:
        handle_domain_error(ctx, e)
    if entry is None:
        click.echo(f"Error: {journal_not_saved()}", err=True)
        ctx.exit(1)

    click.echo(f"Updated entry {entry.id}")
    echo_entry(entry, categories, settings)


@entry_group.command("delete")
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_entry(ctx, entry_id: str, yes: bool) -> None:
    """Delete an entry.

    Examples:
        cashbook entry delete 3f2a...
    """
    controller = LedgerController(EntryStore(ctx.obj["store"]))

    request = controller.request_delete(entry_id)
    if request is None:
        click.echo(f"Error: {entry_not_found(entry_id)}", err=True)
        ctx.exit(1)

    entry = controller.get_entry(entry_id)
    if not yes and not click.confirm(
        f"Are you sure you want to delete entry {entry.id} ({entry.date} {entry.statement})?"
    ):
        controller.discard_delete(request)
        click.echo("Deletion cancelled.")
        return

    if not controller.confirm_delete(request):
        click.echo(f"Error: {journal_not_saved()}", err=True)
        ctx.exit(1)
    click.echo(f"Deleted entry {entry_id}")


@entry_group.command("list")
@click.option("--search", default="", help="Text to find in statement or notes (case-insensitive)")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--category", help="Only entries tagged with this category (name or ID)")
@click.option("--verbose", "-v", is_flag=True, help="Show notes and full entry IDs")
@click.pass_context
def list_entries(
    ctx, search: str, start_date: str | None, end_date: str | None, category: str | None, verbose: bool
):
    """List entries, newest first, with the net balance of the listed entries."""
    store = ctx.obj["store"]
    controller = LedgerController(EntryStore(store))
    categories = CategoryStore(store).load()
    settings = SettingsStore(store).load()

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)
    entries = controller.filter(search, start, end)
    if category:
        category_id = resolve_category_or_exit(ctx, categories, category)
        entries = entries_for_category(entries, category_id)

    if not entries:
        click.echo("No entries found.")
        return

    primary = settings.primary_currency_symbol
    secondary = settings.secondary_currency_symbol

    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    if verbose:
        click.echo("=" * 100)
        for entry in entries:
            click.echo(f"\nEntry ID: {entry.id}")
            echo_entry(entry, categories, settings)
            click.echo("-" * 100)
    else:
        click.echo("-" * 120)
        click.echo(
            f"{'ID':<10} {'Date':<12} {'Statement':<30} {'Category':<18} "
            f"{'In ' + primary:>12} {'Out ' + primary:>12} {'In ' + secondary:>10} {'Out ' + secondary:>10}"
        )
        click.echo("-" * 120)
        for entry in entries:
            click.echo(
                f"{entry.id[:8]:<10} {entry.date:<12} {entry.statement[:30]:<30} "
                f"{category_label(entry.category_id, categories)[:18]:<18} "
                f"{format_amount(entry.received_primary, blank_zero=True):>12} "
                f"{format_amount(entry.paid_primary, blank_zero=True):>12} "
                f"{format_amount(entry.received_secondary, blank_zero=True):>10} "
                f"{format_amount(entry.paid_secondary, blank_zero=True):>10}"
            )

    net_primary, net_secondary = format_balance(controller.aggregate(entries), settings)
    click.echo("-" * 120)
    click.echo(f"Net {settings.primary_currency}: {net_primary} | Net {settings.secondary_currency}: {net_secondary}")


def register_commands(cli: click.Group) -> None:
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
