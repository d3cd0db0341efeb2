"""CLI helpers for category resolution."""

from __future__ import annotations

from typing import Sequence

import click

from cashbook.domain.entities import AccountingCategory
from cashbook.utils.category_resolver import resolve_category


def resolve_category_or_exit(
    ctx: click.Context, categories: Sequence[AccountingCategory], category: str
) -> str | None:
    """Resolve category name or ID, or exit with a CLI error.

    An empty string resolves to None (no category).
    """
    if category == "":
        return None
    try:
        return resolve_category(categories, category)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
