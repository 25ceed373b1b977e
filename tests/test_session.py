from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from billease.config import load_settings
from billease.invoices import Invoice, InvoiceItem
from billease.session import InvoiceSession, apply_update, build_snapshot
from billease.store import InvoiceStore, StoreWriteError


@pytest.fixture()
def session(tmp_path: Path) -> InvoiceSession:
    return InvoiceSession(InvoiceStore(tmp_path / "invoices.json"))


def test_apply_update_merges_shallowly_and_recomputes(sample_invoice: Invoice) -> None:
    updated = apply_update(sample_invoice, {"customerName": "Meera", "paid_by_account": "200"})

    assert updated.id == sample_invoice.id
    assert updated.customer_name == "Meera"
    assert updated.items == sample_invoice.items
    assert updated.due_amount == Decimal("36")
    assert sample_invoice.customer_name == "Asha Traders"
    assert sample_invoice.due_amount is None


def test_apply_update_replaces_items_wholesale(sample_invoice: Invoice) -> None:
    updated = apply_update(
        sample_invoice,
        {"items": [{"id": "n1", "quantity": "1", "rate": "50"}], "paidInCash": 0},
    )

    assert [item.id for item in updated.items] == ["n1"]
    assert updated.due_amount == Decimal("59")


def test_apply_update_treats_malformed_numbers_as_zero(sample_invoice: Invoice) -> None:
    updated = apply_update(
        sample_invoice,
        {"items": [InvoiceItem(id="i", quantity="two", rate=Decimal("5"))], "cgst": ""},  # type: ignore[arg-type]
    )

    assert updated.items[0].quantity == Decimal("0")
    assert updated.cgst == Decimal("0")


def test_apply_update_ignores_patched_due_amount(sample_invoice: Invoice) -> None:
    updated = apply_update(sample_invoice, {"paidInCash": "300", "dueAmount": "999"})

    assert updated.due_amount == Decimal("0")


def test_apply_update_with_full_invoice(sample_invoice: Invoice) -> None:
    replacement = sample_invoice.copy()
    replacement.paid_in_cash = Decimal("36")

    assert apply_update(sample_invoice, replacement).due_amount == Decimal("200")

    replacement.id = "other"
    with pytest.raises(ValueError):
        apply_update(sample_invoice, replacement)


def test_apply_update_rejects_unknown_fields_and_id_changes(sample_invoice: Invoice) -> None:
    with pytest.raises(KeyError):
        apply_update(sample_invoice, {"discount": 5})
    with pytest.raises(ValueError):
        apply_update(sample_invoice, {"id": "new-id"})


def test_snapshot_has_totals_and_words(sample_invoice: Invoice) -> None:
    snapshot = build_snapshot(sample_invoice)

    assert snapshot.totals.grand_total == Decimal("236")
    assert snapshot.amount_in_words == "TWO HUNDRED AND THIRTY SIX ONLY"


def test_snapshot_suppresses_words_for_zero_total(session: InvoiceSession) -> None:
    assert session.snapshot().totals.grand_total == 0
    assert session.snapshot().amount_in_words == ""


def test_session_starts_with_new_invoice_using_settings(tmp_path: Path) -> None:
    settings = load_settings({"BILLEASE_HOME": str(tmp_path), "BILLEASE_DEFAULT_CGST": "6"})
    session = InvoiceSession(InvoiceStore(settings.store_path), settings)

    assert session.invoice.cgst == Decimal("6")
    assert session.invoice.sgst == Decimal("9")
    assert len(session.invoice.items) == 1


def test_save_open_and_update_keep_identity(session: InvoiceSession) -> None:
    session.update({"customerName": "A", "items": [{"id": "i", "quantity": 2, "rate": 100}]})
    first = session.save()
    session.new()
    session.update({"customerName": "B"})
    session.save()

    assert session.open(first.id) is True
    session.update({"customerName": "A edited"})
    session.save()

    saved = session.saved_invoices()
    assert len(saved) == 2
    assert saved[0].id == first.id
    assert saved[0].customer_name == "A edited"


def test_open_unknown_keeps_current(session: InvoiceSession) -> None:
    current = session.invoice

    assert session.open("missing") is False
    assert session.invoice == current


def test_deleting_open_invoice_starts_a_new_one(session: InvoiceSession) -> None:
    saved = session.save()

    assert session.delete(saved.id) is True
    assert session.invoice.id != saved.id
    assert session.saved_invoices() == []


def test_deleting_other_invoice_keeps_current(session: InvoiceSession) -> None:
    other = session.save()
    session.new()
    current_id = session.invoice.id

    session.delete(other.id)
    session.delete("missing")

    assert session.invoice.id == current_id


def test_add_and_remove_items(session: InvoiceSession) -> None:
    item = session.add_item()
    assert len(session.invoice.items) == 2

    assert session.remove_item(item.id) is True
    assert session.remove_item("missing") is False
    assert len(session.invoice.items) == 1


def test_failed_save_keeps_session_state(session: InvoiceSession, monkeypatch: pytest.MonkeyPatch) -> None:
    session.update({"customerName": "Unsaved"})

    def _fail(_invoice):
        raise StoreWriteError("quota exceeded")

    monkeypatch.setattr(session.store, "save", _fail)

    with pytest.raises(StoreWriteError):
        session.save()
    assert session.invoice.customer_name == "Unsaved"


def test_apply_update_with_out_of_range_quantity_does_not_raise(sample_invoice: Invoice) -> None:
    updated = apply_update(
        sample_invoice,
        {"items": [{"id": "i", "quantity": "1e999999", "rate": "10"}], "paidInCash": "0"},
    )

    assert updated.items[0].quantity == Decimal("0")
    assert updated.due_amount == Decimal("0")
    assert build_snapshot(updated).amount_in_words == ""
