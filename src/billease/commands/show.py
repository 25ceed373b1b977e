"""Print one saved invoice with its computed totals."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from ..formatting import format_amount, format_currency
from ..session import build_snapshot
from ..totals import item_amount
from ._common import add_store_argument, open_store


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="billease show", description="Show a saved invoice.")
    parser.add_argument("invoice_id", help="Identifier of the invoice")
    add_store_argument(parser)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    store = open_store(args)
    invoice = store.load(args.invoice_id)
    if invoice is None:
        print(f"Invoice not found: {args.invoice_id}", file=sys.stderr)
        return 1

    snapshot = build_snapshot(invoice)
    totals = snapshot.totals
    print(f"Invoice {invoice.invoice_number or invoice.id}")
    if invoice.invoice_date:
        print(f"Date: {invoice.invoice_date.isoformat()}")
    print(f"Customer: {invoice.customer_name}")
    print()
    for position, item in enumerate(invoice.items, start=1):
        print(
            f"{position:>3}. {item.description or '':<30} "
            f"{format_amount(item.quantity):>10} x {format_amount(item.rate):>12} "
            f"= {format_amount(item_amount(item)):>14}"
        )
    print()
    print(f"Subtotal: {format_currency(totals.subtotal)}")
    print(f"CGST ({invoice.cgst or 0}%): {format_currency(totals.cgst_amount)}")
    print(f"SGST ({invoice.sgst or 0}%): {format_currency(totals.sgst_amount)}")
    print(f"Grand total: {format_currency(totals.grand_total)}")
    if totals.due_amount is not None:
        if invoice.paid_by_account is not None:
            print(f"Paid (Account): {format_currency(invoice.paid_by_account)}")
        if invoice.paid_in_cash is not None:
            print(f"Paid (Cash): {format_currency(invoice.paid_in_cash)}")
        print(f"Due: {format_currency(totals.due_amount)}")
    if snapshot.amount_in_words:
        print(f"In words: {snapshot.amount_in_words}")
    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
