"""Check saved invoices against the form rules."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from ..validator import export_report, validate_invoices
from ._common import add_store_argument, open_store


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="billease validate",
        description="Report problems in the saved invoices.",
    )
    add_store_argument(parser)
    parser.add_argument(
        "--excel",
        type=Path,
        help="Also write the issues to this Excel file.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    store = open_store(args)
    issues = validate_invoices(store.list())
    for issue in issues:
        print(f"{issue.details.get('invoice_id', '-')}  {issue.code}: {issue.message}")

    if args.excel is not None:
        destination = export_report(issues, destination=args.excel)
        print(f"Issues written to: {destination}")

    if issues:
        return 2
    print("No issues found.")
    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
