"""Main CLI entry point."""

import logging

import click

from cashbook.database.factories import create_sqlite_store
from cashbook.log import setup_logging

# Import and register all commands at module level
from cashbook.cli.commands import entry, balance, export


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CASHBOOK_DB_PATH environment variable)",
    envvar="CASHBOOK_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Cashbook - Dual-currency cash journal.

    Record dated cash movements in a primary and a secondary currency, search
    them, and follow the net balance of each currency.
    """
    ctx.ensure_object(dict)
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
entry.register_commands(cli)
balance.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
