"""Service module exports."""

from . import comparison, debts, export_csv, import_csv, reports

__all__ = [
    "comparison",
    "debts",
    "export_csv",
    "import_csv",
    "reports",
]
