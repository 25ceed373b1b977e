"""Editing session: the boundary the form layer talks to.

Edits arrive as patches through :func:`apply_update`, which returns a new
invoice with derived fields recomputed. :class:`InvoiceSession` keeps the
invoice being edited and forwards explicit save/open/delete actions to the
:class:`~billease.store.InvoiceStore`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .config import Settings
from .invoices import (
    FIELD_KEYS,
    Invoice,
    InvoiceItem,
    item_from_dict,
    new_invoice,
    new_item,
)
from .store import InvoiceStore
from .totals import Totals, compute_totals
from .utils import optional_decimal, parse_date
from .words import amount_to_words

LOGGER = logging.getLogger("billease.session")

_ATTRIBUTES = frozenset(FIELD_KEYS.values())


@dataclass(frozen=True)
class InvoiceSnapshot:
    """Read-only view handed to the export layer."""

    invoice: Invoice
    totals: Totals
    amount_in_words: str


def _coerce_items(value: Any) -> list[InvoiceItem]:
    items: list[InvoiceItem] = []
    for entry in value or []:
        if isinstance(entry, InvoiceItem):
            items.append(
                InvoiceItem(
                    id=entry.id,
                    quantity=optional_decimal(entry.quantity),
                    rate=optional_decimal(entry.rate),
                    description=entry.description,
                )
            )
        else:
            items.append(item_from_dict(entry))
    return items


def _coerce(attribute: str, value: Any) -> Any:
    if attribute == "items":
        return _coerce_items(value)
    if attribute == "invoice_date":
        return parse_date(value)
    if attribute == "customer_name":
        return "" if value is None else str(value)
    if attribute == "invoice_number":
        return None if value is None else str(value)
    return optional_decimal(value)


def recompute(invoice: Invoice) -> Invoice:
    """Return a copy of ``invoice`` with ``due_amount`` brought up to date."""

    updated = invoice.copy()
    updated.due_amount = compute_totals(updated).due_amount
    return updated


def apply_update(invoice: Invoice, patch: Invoice | Mapping[str, Any]) -> Invoice:
    """Merge ``patch`` onto ``invoice`` and return the recomputed result.

    ``patch`` is either a full :class:`Invoice` or a mapping keyed by
    attribute names (``customer_name``) or stored names (``customerName``).
    Top-level fields are merged shallowly and ``items`` is replaced as a
    whole. The identity never changes; ``due_amount`` in a patch is ignored
    because it is always derived.
    """

    if isinstance(patch, Invoice):
        if patch.id != invoice.id:
            raise ValueError(f"Cannot replace invoice {invoice.id} with {patch.id}")
        return recompute(patch)

    updated = invoice.copy()
    for key, value in patch.items():
        attribute = FIELD_KEYS.get(key, key)
        if attribute not in _ATTRIBUTES:
            raise KeyError(key)
        if attribute == "id":
            if value != invoice.id:
                raise ValueError(f"Invoice id is immutable ({invoice.id} -> {value})")
            continue
        if attribute == "due_amount":
            continue
        setattr(updated, attribute, _coerce(attribute, value))

    updated.due_amount = compute_totals(updated).due_amount
    return updated


def build_snapshot(invoice: Invoice) -> InvoiceSnapshot:
    """Return the invoice with its totals and the grand total in words."""

    current = recompute(invoice)
    totals = compute_totals(current)
    words = amount_to_words(totals.grand_total) if totals.grand_total > 0 else ""
    return InvoiceSnapshot(invoice=current, totals=totals, amount_in_words=words)


class InvoiceSession:
    """Holds the invoice being edited and keeps it consistent with the store.

    The session always points at a live invoice: it starts with a new one and
    deleting the open invoice replaces it with a new one.
    """

    def __init__(self, store: InvoiceStore, settings: Settings | None = None) -> None:
        self.store = store
        self.settings = settings
        self._invoice = self._fresh()

    @property
    def invoice(self) -> Invoice:
        return self._invoice.copy()

    def _fresh(self) -> Invoice:
        if self.settings is None:
            return new_invoice()
        return new_invoice(cgst=self.settings.default_cgst, sgst=self.settings.default_sgst)

    def new(self) -> Invoice:
        """Discard the current edits and start a new invoice."""

        self._invoice = self._fresh()
        LOGGER.info("New invoice %s started", self._invoice.id)
        return self.invoice

    def update(self, patch: Invoice | Mapping[str, Any]) -> InvoiceSnapshot:
        self._invoice = apply_update(self._invoice, patch)
        return self.snapshot()

    def add_item(self) -> InvoiceItem:
        """Append a blank line item and return it."""

        item = new_item()
        items = self._invoice.items + [item]
        self._invoice = apply_update(self._invoice, {"items": items})
        return item

    def remove_item(self, item_id: str) -> bool:
        items = [item for item in self._invoice.items if item.id != item_id]
        if len(items) == len(self._invoice.items):
            return False
        self._invoice = apply_update(self._invoice, {"items": items})
        return True

    def snapshot(self) -> InvoiceSnapshot:
        return build_snapshot(self._invoice)

    def save(self) -> Invoice:
        """Persist the current invoice (insert or overwrite by id).

        :class:`~billease.store.StoreWriteError` propagates unchanged and the
        session keeps its state.
        """

        current = recompute(self._invoice)
        self.store.save(current)
        self._invoice = current
        return self.invoice

    def open(self, invoice_id: str) -> bool:
        """Make the saved invoice ``invoice_id`` current.

        Returns ``False`` and keeps the current invoice when it is not found.
        """

        saved = self.store.load(invoice_id)
        if saved is None:
            LOGGER.info("Invoice %s not found", invoice_id)
            return False
        self._invoice = recompute(saved)
        return True

    def delete(self, invoice_id: str) -> bool:
        """Delete a saved invoice, starting a new one if it was open."""

        removed = self.store.delete(invoice_id)
        if invoice_id == self._invoice.id:
            self.new()
        return removed

    def saved_invoices(self) -> list[Invoice]:
        return self.store.list()


__all__ = [
    "InvoiceSession",
    "InvoiceSnapshot",
    "apply_update",
    "build_snapshot",
    "recompute",
]
