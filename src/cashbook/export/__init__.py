"""Export adapters for ledger views."""

from cashbook.export.image import MatplotlibImageExporter
from cashbook.export.csv_export import write_entries_csv

__all__ = ["MatplotlibImageExporter", "write_entries_csv"]
