from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest
from openpyxl import load_workbook

from billease import cli
from billease.invoices import Invoice, InvoiceItem
from billease.store import InvoiceStore


@pytest.fixture()
def store_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("BILLEASE_HOME", str(tmp_path))
    monkeypatch.setenv("BILLEASE_LOG_FILE", str(tmp_path / "logs" / "billease.log"))
    path = tmp_path / "invoices.json"
    store = InvoiceStore(path)
    store.save(
        Invoice(
            id="INV1",
            invoice_number="7",
            customer_name="Asha Traders",
            items=[InvoiceItem(id="i1", quantity=Decimal("2"), rate=Decimal("100"), description="Widgets")],
            cgst=Decimal("9"),
            sgst=Decimal("9"),
            paid_by_account=Decimal("200"),
        )
    )
    store.save(Invoice(id="INV2", items=[]))
    return path


def test_available_commands() -> None:
    names = [spec.name for spec in cli.available_commands()]
    assert names == ["list", "show", "delete", "validate", "report"]


def test_list(store_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["list", "--store", str(store_path)]) == 0

    out = capsys.readouterr().out
    assert "INV1" in out
    assert "₹236.00" in out


def test_show(store_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["show", "INV1", "--store", str(store_path)]) == 0

    out = capsys.readouterr().out
    assert "Grand total: ₹236.00" in out
    assert "Due: ₹36.00" in out
    assert "Paid (Account): ₹200.00" in out
    assert "Paid (Cash)" not in out
    assert "TWO HUNDRED AND THIRTY SIX ONLY" in out


def test_show_unknown(store_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["show", "nope", "--store", str(store_path)]) == 1
    assert "not found" in capsys.readouterr().err


def test_delete_uses_default_store_from_environment(store_path: Path) -> None:
    assert cli.main(["delete", "INV2"]) == 0
    assert cli.main(["delete", "INV2"]) == 0

    assert [invoice.id for invoice in InvoiceStore(store_path).list()] == ["INV1"]


def test_validate_reports_issues(store_path: Path, tmp_path: Path) -> None:
    excel = tmp_path / "issues.xlsx"

    assert cli.main(["validate", "--store", str(store_path), "--excel", str(excel)]) == 2

    rows = list(load_workbook(excel)["Issues"].iter_rows(values_only=True))
    assert ("INV2", "CUSTOMER_REQUIRED", "Customer name is required") in rows


def test_report(store_path: Path, tmp_path: Path) -> None:
    output = tmp_path / "report.xlsx"

    assert cli.main(["report", "--store", str(store_path), "-o", str(output)]) == 0
    assert set(load_workbook(output).sheetnames) == {"Invoices", "Summary"}


def test_help_exits_cleanly(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["list", "--help"]) == 0
    assert "--store" in capsys.readouterr().out


def test_unknown_command_exits_with_usage(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["frobnicate"])

    assert excinfo.value.code == 2
    assert "usage" in capsys.readouterr().err
