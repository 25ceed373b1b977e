"""Invoice aggregate: record shape, defaults and the on-disk mapping."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from .utils import new_id, optional_decimal, parse_date

LOGGER = logging.getLogger("billease.invoices")

DEFAULT_CGST = Decimal("9")
DEFAULT_SGST = Decimal("9")


class InvoiceFormatError(ValueError):
    """Raised when a stored record cannot be turned into an :class:`Invoice`."""


@dataclass
class InvoiceItem:
    """A single billed line. The amount is always derived, never stored."""

    id: str
    quantity: Decimal | None = None
    rate: Decimal | None = None
    description: str | None = None


@dataclass
class Invoice:
    """Lightweight invoice representation shared by the engine and the store.

    Optional fields hold ``None`` when absent so that a record read from an
    older file is written back without gaining values it never had.
    """

    id: str
    invoice_date: date | None = None
    customer_name: str = ""
    items: list[InvoiceItem] = field(default_factory=list)
    cgst: Decimal | None = None
    sgst: Decimal | None = None
    invoice_number: str | None = None
    paid_by_account: Decimal | None = None
    paid_in_cash: Decimal | None = None
    due_amount: Decimal | None = None

    def is_complete(self) -> bool:
        """Return ``True`` when the invoice has at least one item."""

        return bool(self.items)

    def has_payments(self) -> bool:
        """Return ``True`` when any payment field is present."""

        return self.paid_by_account is not None or self.paid_in_cash is not None

    def copy(self) -> "Invoice":
        return copy.deepcopy(self)


def new_item(
    *,
    description: str = "",
    quantity: Decimal = Decimal("1"),
    rate: Decimal = Decimal("0"),
) -> InvoiceItem:
    """Return a blank line item with a fresh identity."""

    return InvoiceItem(id=new_id(), quantity=quantity, rate=rate, description=description)


def new_invoice(
    *,
    today: date | None = None,
    cgst: Decimal = DEFAULT_CGST,
    sgst: Decimal = DEFAULT_SGST,
) -> Invoice:
    """Return a new invoice with today's date, one blank item and default taxes."""

    return Invoice(
        id=new_id(),
        invoice_date=today or date.today(),
        customer_name="",
        items=[new_item()],
        cgst=cgst,
        sgst=sgst,
    )


# On-disk keys keep the camelCase names used by earlier builds of the tool.
FIELD_KEYS: dict[str, str] = {
    "id": "id",
    "invoiceNumber": "invoice_number",
    "invoiceDate": "invoice_date",
    "customerName": "customer_name",
    "items": "items",
    "cgst": "cgst",
    "sgst": "sgst",
    "paidByAccount": "paid_by_account",
    "paidInCash": "paid_in_cash",
    "dueAmount": "due_amount",
}

_DECIMAL_FIELDS = ("cgst", "sgst", "paid_by_account", "paid_in_cash", "due_amount")


def item_to_dict(item: InvoiceItem) -> dict[str, Any]:
    data: dict[str, Any] = {"id": item.id}
    if item.description is not None:
        data["description"] = item.description
    if item.quantity is not None:
        data["quantity"] = str(item.quantity)
    if item.rate is not None:
        data["rate"] = str(item.rate)
    return data


def item_from_dict(data: Mapping[str, Any]) -> InvoiceItem:
    if not isinstance(data, Mapping):
        raise InvoiceFormatError(f"Item must be an object, got {type(data).__name__}")

    item_id = data.get("id")
    if not item_id:
        item_id = new_id()
        LOGGER.debug("Item without id, assigned %s", item_id)

    description = data.get("description")
    return InvoiceItem(
        id=str(item_id),
        quantity=optional_decimal(data.get("quantity")),
        rate=optional_decimal(data.get("rate")),
        description=None if description is None else str(description),
    )


def invoice_to_dict(invoice: Invoice) -> dict[str, Any]:
    """Serialise ``invoice`` to its on-disk mapping, omitting absent fields."""

    data: dict[str, Any] = {"id": invoice.id}
    if invoice.invoice_number is not None:
        data["invoiceNumber"] = invoice.invoice_number
    if invoice.invoice_date is not None:
        data["invoiceDate"] = invoice.invoice_date.isoformat()
    data["customerName"] = invoice.customer_name
    data["items"] = [item_to_dict(item) for item in invoice.items]
    for key, attribute in FIELD_KEYS.items():
        if attribute in _DECIMAL_FIELDS:
            value = getattr(invoice, attribute)
            if value is not None:
                data[key] = str(value)
    return data


def invoice_from_dict(data: Mapping[str, Any]) -> Invoice:
    """Build an :class:`Invoice` from a stored mapping.

    Missing optional keys stay ``None``. Raises :class:`InvoiceFormatError`
    when the record is not a mapping or has no usable ``id``.
    """

    if not isinstance(data, Mapping):
        raise InvoiceFormatError(f"Invoice must be an object, got {type(data).__name__}")

    invoice_id = data.get("id")
    if not isinstance(invoice_id, str) or not invoice_id:
        raise InvoiceFormatError("Invoice record without an id")

    raw_items = data.get("items")
    if raw_items is None:
        raw_items = []
    if not isinstance(raw_items, list):
        raise InvoiceFormatError(f"Invoice {invoice_id}: items must be a list")

    number = data.get("invoiceNumber")
    return Invoice(
        id=invoice_id,
        invoice_date=parse_date(data.get("invoiceDate")),
        customer_name=str(data.get("customerName") or ""),
        items=[item_from_dict(item) for item in raw_items],
        cgst=optional_decimal(data.get("cgst")),
        sgst=optional_decimal(data.get("sgst")),
        invoice_number=None if number is None else str(number),
        paid_by_account=optional_decimal(data.get("paidByAccount")),
        paid_in_cash=optional_decimal(data.get("paidInCash")),
        due_amount=optional_decimal(data.get("dueAmount")),
    )


__all__ = [
    "DEFAULT_CGST",
    "DEFAULT_SGST",
    "FIELD_KEYS",
    "Invoice",
    "InvoiceFormatError",
    "InvoiceItem",
    "invoice_from_dict",
    "invoice_to_dict",
    "item_from_dict",
    "item_to_dict",
    "new_invoice",
    "new_item",
]
