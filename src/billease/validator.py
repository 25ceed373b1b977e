"""Advisory checks mirroring the rules of the invoice form.

The calculation engine never calls these checks: out-of-range values are
computed as given. The form layer uses them to show messages and the CLI
to report on saved invoices.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Iterable

from .invoices import Invoice
from .utils import parse_decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class ValidationIssue:
    """Representation of a problem detected on an invoice."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, str] | None = None,
    ) -> None:
        self.message = message
        self.code = code or "GENERIC"
        self.details = details or {}

    def __repr__(self) -> str:
        return f"ValidationIssue(code={self.code!r}, message={self.message!r})"

    def as_cells(self) -> list[str]:
        """Serialise the issue for tabular export."""

        return [self.details.get("invoice_id", ""), self.code, self.message]


def validate_invoice(invoice: Invoice) -> list[ValidationIssue]:
    """Return the issues found on ``invoice``; an empty list means valid."""

    issues: list[ValidationIssue] = []
    issues.extend(_check_customer(invoice))
    issues.extend(_check_items(invoice))
    issues.extend(_check_tax_rates(invoice))
    issues.extend(_check_payments(invoice))
    return issues


def validate_invoices(invoices: Iterable[Invoice]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for invoice in invoices:
        issues.extend(validate_invoice(invoice))
    return issues


def _issue(invoice: Invoice, code: str, message: str, **details: str) -> ValidationIssue:
    return ValidationIssue(message, code=code, details={"invoice_id": invoice.id, **details})


def _check_customer(invoice: Invoice) -> list[ValidationIssue]:
    if invoice.customer_name.strip():
        return []
    return [_issue(invoice, "CUSTOMER_REQUIRED", "Customer name is required")]


def _check_items(invoice: Invoice) -> list[ValidationIssue]:
    if not invoice.is_complete():
        return [_issue(invoice, "NO_ITEMS", "At least one item is required")]

    issues: list[ValidationIssue] = []
    for position, item in enumerate(invoice.items, start=1):
        # Records from builds without descriptions leave the field absent.
        if item.description is not None and not item.description.strip():
            issues.append(
                _issue(
                    invoice,
                    "DESCRIPTION_REQUIRED",
                    f"Item {position}: description is required",
                    item_id=item.id,
                )
            )
        for name, value in (("quantity", item.quantity), ("rate", item.rate)):
            if parse_decimal(value) < ZERO:
                issues.append(
                    _issue(
                        invoice,
                        f"NEGATIVE_{name.upper()}",
                        f"Item {position}: {name} must be non-negative",
                        item_id=item.id,
                    )
                )
    return issues


def _check_tax_rates(invoice: Invoice) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for name, value in (("cgst", invoice.cgst), ("sgst", invoice.sgst)):
        rate = parse_decimal(value)
        if rate < ZERO or rate > HUNDRED:
            issues.append(
                _issue(
                    invoice,
                    "TAX_RATE_RANGE",
                    f"{name.upper()} must be between 0 and 100",
                    field=name,
                    value=str(rate),
                )
            )
    return issues


def _check_payments(invoice: Invoice) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for name, value in (
        ("paid_by_account", invoice.paid_by_account),
        ("paid_in_cash", invoice.paid_in_cash),
    ):
        if parse_decimal(value) < ZERO:
            issues.append(
                _issue(invoice, "NEGATIVE_PAYMENT", f"{name} must be non-negative", field=name)
            )
    return issues


def export_report(issues: Iterable[ValidationIssue], *, destination: Path) -> Path:
    """Export validation issues to an Excel report."""

    from .logging import ExcelLogger, ExcelLoggerConfig

    logger = ExcelLogger(
        ExcelLoggerConfig(
            columns=("invoice_id", "code", "message"),
            filename=str(destination),
            title="Issues",
        )
    )
    return logger.write_rows(issues)


__all__ = ["ValidationIssue", "export_report", "validate_invoice", "validate_invoices"]
