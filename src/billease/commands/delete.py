"""Delete a saved invoice."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from ..store import StoreWriteError
from ._common import add_store_argument, open_store


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="billease delete", description="Delete a saved invoice.")
    parser.add_argument("invoice_id", help="Identifier of the invoice")
    add_store_argument(parser)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    store = open_store(args)
    try:
        removed = store.delete(args.invoice_id)
    except StoreWriteError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if removed:
        print(f"Invoice deleted: {args.invoice_id}")
    else:
        print(f"Invoice not found, nothing deleted: {args.invoice_id}")
    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
