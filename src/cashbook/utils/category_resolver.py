"""Utility for resolving category names to IDs."""

from typing import Sequence

from cashbook.domain.entities import AccountingCategory
from cashbook.domain.errors import NotFoundError


def resolve_category(categories: Sequence[AccountingCategory], category: str) -> str:
    """Resolve a category name or ID to a category ID.

    IDs match exactly; names match case-insensitively.

    Args:
        categories: Known categories
        category: Category ID or name

    Returns:
        Category ID

    Raises:
        NotFoundError: If no category matches
    """
    for cat in categories:
        if cat.id == category:
            return cat.id

    wanted = category.strip().casefold()
    for cat in categories:
        if cat.name.casefold() == wanted:
            return cat.id

    raise NotFoundError(f"Category '{category}' not found")
