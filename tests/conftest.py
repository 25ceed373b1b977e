from __future__ import annotations

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from billease.invoices import Invoice, InvoiceItem  # noqa: E402


@pytest.fixture()
def sample_invoice() -> Invoice:
    return Invoice(
        id="inv-1",
        invoice_date=date(2024, 3, 15),
        customer_name="Asha Traders",
        items=[InvoiceItem(id="item-1", quantity=Decimal("2"), rate=Decimal("100"), description="Widgets")],
        cgst=Decimal("9"),
        sgst=Decimal("9"),
    )
