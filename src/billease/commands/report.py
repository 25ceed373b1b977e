"""Generate an Excel report with the totals of the saved invoices."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from ..reporting import default_report_destination, summarise_invoices, write_excel_report
from ._common import add_store_argument, open_store


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="billease report",
        description="Write an Excel workbook with per-invoice and per-customer totals.",
    )
    add_store_argument(parser)
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Destination workbook (default: next to the store file).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    store = open_store(args)
    data = summarise_invoices(store.list())
    destination = args.output or default_report_destination(store.path)
    write_excel_report(data, destination)
    print(f"Report saved to: {destination}")
    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
