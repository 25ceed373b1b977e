"""Calculation engine deriving invoice totals.

:func:`compute_totals` is pure: it reads the invoice, never mutates it and
keeps full :class:`~decimal.Decimal` precision. Rounding for display is left
to :mod:`billease.formatting`.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .invoices import Invoice, InvoiceItem
from .utils import parse_decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Totals:
    """Derived monetary values for one invoice."""

    subtotal: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    grand_total: Decimal
    total_paid: Decimal
    due_amount: Decimal | None = None


def item_amount(item: InvoiceItem) -> Decimal:
    """Return ``quantity * rate`` treating missing or malformed values as zero."""

    return parse_decimal(item.quantity) * parse_decimal(item.rate)


def compute_totals(invoice: Invoice) -> Totals:
    """Derive subtotal, tax amounts, grand total and the due amount.

    ``due_amount`` is ``None`` when the invoice carries no payment fields and
    is otherwise floored at zero.
    """

    subtotal = sum((item_amount(item) for item in invoice.items), ZERO)
    cgst_amount = subtotal * parse_decimal(invoice.cgst) / HUNDRED
    sgst_amount = subtotal * parse_decimal(invoice.sgst) / HUNDRED
    grand_total = subtotal + cgst_amount + sgst_amount

    total_paid = parse_decimal(invoice.paid_by_account) + parse_decimal(invoice.paid_in_cash)
    due_amount: Decimal | None = None
    if invoice.has_payments():
        due_amount = max(ZERO, grand_total - total_paid)

    return Totals(
        subtotal=subtotal,
        cgst_amount=cgst_amount,
        sgst_amount=sgst_amount,
        grand_total=grand_total,
        total_paid=total_paid,
        due_amount=due_amount,
    )


__all__ = ["Totals", "compute_totals", "item_amount"]
