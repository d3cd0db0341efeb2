"""PNG export of ledger views rendered with matplotlib."""

import asyncio
import logging
from pathlib import Path

from matplotlib.figure import Figure

from cashbook.domain.aggregation import category_label
from cashbook.domain.export import ExportAdapter, LedgerView
from cashbook.utils.formatting import format_amount, format_balance

logger = logging.getLogger(__name__)

EMPTY_VIEW_TEXT = "No entries"


def table_header(view: LedgerView) -> list[str]:
    primary = view.settings.primary_currency_symbol
    secondary = view.settings.secondary_currency_symbol
    return [
        "Date",
        "Statement",
        "Category",
        f"Received {primary}",
        f"Paid {primary}",
        f"Received {secondary}",
        f"Paid {secondary}",
    ]


def table_rows(view: LedgerView) -> list[list[str]]:
    """Table cells for each entry of the view, in view order."""
    return [
        [
            entry.date,
            entry.statement,
            category_label(entry.category_id, view.categories),
            format_amount(entry.received_primary, blank_zero=True),
            format_amount(entry.paid_primary, blank_zero=True),
            format_amount(entry.received_secondary, blank_zero=True),
            format_amount(entry.paid_secondary, blank_zero=True),
        ]
        for entry in view.entries
    ]


class MatplotlibImageExporter(ExportAdapter):
    """Renders a LedgerView as a PNG table with a totals footer."""

    def __init__(self, output_dir: str | Path = ".", dpi: int = 150):
        """Initialize exporter.

        Args:
            output_dir: Directory the images are written to
            dpi: Output resolution
        """
        self.output_dir = Path(output_dir)
        self.dpi = dpi

    async def export_as_image(self, render_target: LedgerView, filename: str) -> Path:
        """Render off the event loop and save to output_dir / filename."""
        path = self.output_dir / filename
        return await asyncio.to_thread(self.render, render_target, path)

    def render(self, view: LedgerView, path: Path) -> Path:
        """Render the view synchronously to path."""
        header = table_header(view)
        rows = table_rows(view) or [[EMPTY_VIEW_TEXT] + [""] * (len(header) - 1)]

        # Figure is used without pyplot so rendering is safe off the main thread
        fig = Figure(figsize=(11, 1.5 + 0.3 * (len(rows) + 1)))
        ax = fig.add_subplot()
        ax.axis("off")
        title = view.title
        if view.settings.company_name:
            title = f"{view.settings.company_name}\n{title}"
        ax.set_title(f"{title} ({view.generated_on})", fontsize=12, fontweight="bold")

        table = ax.table(cellText=rows, colLabels=header, loc="upper center", cellLoc="center")
        table.auto_set_font_size(False)
        table.set_fontsize(9)
        table.scale(1, 1.3)

        primary_total, secondary_total = format_balance(view.totals, view.settings)
        fig.text(
            0.5,
            0.02,
            f"Net {view.settings.primary_currency}: {primary_total}    "
            f"Net {view.settings.secondary_currency}: {secondary_total}",
            ha="center",
            fontsize=10,
        )

        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=self.dpi, bbox_inches="tight")
        logger.debug("Rendered %d rows to %s", len(view.entries), path)
        return path
