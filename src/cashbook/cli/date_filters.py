"""CLI helpers for date range resolution."""

import click

from cashbook.utils.date_parser import parse_iso_date


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
) -> tuple[str, str]:
    """Resolve --start-date/--end-date into ISO strings ("" when unset)."""
    try:
        start = parse_iso_date(start_date)
    except ValueError as e:
        click.echo(f"Error: Invalid start date: {e}", err=True)
        ctx.exit(1)

    try:
        end = parse_iso_date(end_date)
    except ValueError as e:
        click.echo(f"Error: Invalid end date: {e}", err=True)
        ctx.exit(1)

    if start and end and start > end:
        click.echo(f"Error: Start date {start} is after end date {end}.", err=True)
        ctx.exit(1)

    return start, end
