"""Helpers shared by the command modules."""

from __future__ import annotations

import argparse
from pathlib import Path

from ..config import Settings, load_settings
from ..logging import configure_logging
from ..store import InvoiceStore


def add_store_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--store",
        type=Path,
        help="JSON file with the saved invoices (default: $BILLEASE_STORE or ~/.billease/invoices.json).",
    )


def open_store(args: argparse.Namespace, settings: Settings | None = None) -> InvoiceStore:
    """Configure logging and open the store selected on the command line."""

    settings = settings or load_settings()
    configure_logging(settings.log_file)
    path = args.store or settings.store_path
    return InvoiceStore(path)
