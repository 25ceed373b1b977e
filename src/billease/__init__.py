"""Invoice data model, calculation engine and persistence for BillEase."""

__all__ = [
    "cli",
    "commands",
    "config",
    "formatting",
    "invoices",
    "logging",
    "reporting",
    "session",
    "store",
    "totals",
    "utils",
    "validator",
    "words",
]
