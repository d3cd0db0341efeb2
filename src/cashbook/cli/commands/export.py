"""Export commands."""

import asyncio
from pathlib import Path

import click

from cashbook.cli.date_filters import resolve_cli_date_range
from cashbook.cli.error_handling import handle_domain_error
from cashbook.database.stores import CategoryStore, EntryStore, SettingsStore
from cashbook.domain.errors import DomainError
from cashbook.domain.export import default_export_basename
from cashbook.domain.ledger import LedgerController
from cashbook.export.csv_export import write_entries_csv
from cashbook.export.image import MatplotlibImageExporter


def filter_options(func):
    """Attach the view filter options shared by export commands."""
    func = click.option("--end-date", help="End date (YYYY-MM-DD or relative)")(func)
    func = click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")(func)
    func = click.option("--search", default="", help="Text to find in statement or notes")(func)
    return func


@click.group()
def export_group():
    """Export the journal view."""
    pass


@export_group.command("image")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory to write the image to",
)
@click.option("--name", help="Base file name without extension (default: cash-journal-<today>)")
@click.option("--title", default="Cash Journal", show_default=True, help="Title shown on the image")
@filter_options
@click.pass_context
def export_image(
    ctx,
    output_dir: str,
    name: str | None,
    title: str,
    search: str,
    start_date: str | None,
    end_date: str | None,
) -> None:
    """Render the (filtered) journal with its totals to a PNG file.

    Examples:
        cashbook export image
        cashbook export image --start-date "this month" --output-dir reports
    """
    store = ctx.obj["store"]
    controller = LedgerController(
        EntryStore(store), export_adapter=MatplotlibImageExporter(Path(output_dir))
    )
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)

    view = controller.build_view(
        title,
        search_text=search,
        start_date=start,
        end_date=end,
        settings=SettingsStore(store).load(),
        categories=CategoryStore(store).load(),
    )
    try:
        path = asyncio.run(controller.export_view(view, name or default_export_basename()))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Exported {len(view.entries)} entries to {path}")


@export_group.command("csv")
@click.argument("output", type=click.Path(dir_okay=False))
@filter_options
@click.pass_context
def export_csv(ctx, output: str, search: str, start_date: str | None, end_date: str | None) -> None:
    """Write the (filtered) journal to a CSV file.

    Examples:
        cashbook export csv journal.csv --start-date 2024-01-01
    """
    store = ctx.obj["store"]
    controller = LedgerController(EntryStore(store))
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)

    entries = controller.filter(search, start, end)
    try:
        count = write_entries_csv(
            entries,
            output,
            categories=CategoryStore(store).load(),
            settings=SettingsStore(store).load(),
        )
    except OSError as e:
        click.echo(f"Error: Could not write {output}: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Exported {count} entries to {output}")


def register_commands(cli: click.Group) -> None:
    """Register export commands with main CLI."""
    cli.add_command(export_group, name="export")
