"""List the saved invoices with their grand totals."""

from __future__ import annotations

import argparse
from typing import Sequence

from ..formatting import format_currency
from ..totals import compute_totals
from ._common import add_store_argument, open_store


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="billease list", description="List saved invoices.")
    add_store_argument(parser)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    store = open_store(args)
    invoices = store.list()
    if not invoices:
        print("No saved invoices.")
        return 0

    for invoice in invoices:
        totals = compute_totals(invoice)
        date_text = invoice.invoice_date.isoformat() if invoice.invoice_date else "-"
        print(
            f"{invoice.id}  {invoice.invoice_number or '-':<10} {date_text}  "
            f"{invoice.customer_name or '-':<30} {format_currency(totals.grand_total):>16}"
        )
    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
