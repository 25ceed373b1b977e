"""Aggregate saved invoices and build Excel reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Iterable

from openpyxl import Workbook

from .formatting import round_currency
from .invoices import Invoice
from .totals import compute_totals


@dataclass
class ReportTotals:
    """Aggregate of monetary values for a set of invoices."""

    subtotal: Decimal = field(default_factory=lambda: Decimal("0"))
    tax_total: Decimal = field(default_factory=lambda: Decimal("0"))
    grand_total: Decimal = field(default_factory=lambda: Decimal("0"))
    paid: Decimal = field(default_factory=lambda: Decimal("0"))
    due: Decimal = field(default_factory=lambda: Decimal("0"))
    count: int = 0

    def add(self, row: "InvoiceRow") -> None:
        self.subtotal += row.subtotal
        self.tax_total += row.cgst_amount + row.sgst_amount
        self.grand_total += row.grand_total
        self.paid += row.paid
        self.due += row.due
        self.count += 1


@dataclass
class InvoiceRow:
    """One saved invoice with its derived totals."""

    invoice_id: str
    invoice_number: str
    invoice_date: str
    customer_name: str
    subtotal: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    grand_total: Decimal
    paid: Decimal
    due: Decimal


@dataclass
class ReportData:
    """Rows plus totals per customer and overall."""

    rows: list[InvoiceRow]
    totals_by_customer: dict[str, ReportTotals]
    overall_totals: ReportTotals


def _row_for(invoice: Invoice) -> InvoiceRow:
    totals = compute_totals(invoice)
    # Invoices without payment fields are treated as fully due.
    due = totals.grand_total if totals.due_amount is None else totals.due_amount
    return InvoiceRow(
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number or "",
        invoice_date=invoice.invoice_date.isoformat() if invoice.invoice_date else "",
        customer_name=invoice.customer_name,
        subtotal=totals.subtotal,
        cgst_amount=totals.cgst_amount,
        sgst_amount=totals.sgst_amount,
        grand_total=totals.grand_total,
        paid=totals.total_paid,
        due=due,
    )


def summarise_invoices(invoices: Iterable[Invoice]) -> ReportData:
    """Compute every invoice and aggregate the results."""

    rows: list[InvoiceRow] = []
    by_customer: dict[str, ReportTotals] = {}
    overall = ReportTotals()

    for invoice in invoices:
        row = _row_for(invoice)
        rows.append(row)
        customer = row.customer_name.strip() or "(no customer)"
        by_customer.setdefault(customer, ReportTotals()).add(row)
        overall.add(row)

    return ReportData(rows=rows, totals_by_customer=by_customer, overall_totals=overall)


def default_report_destination(store_path: Path) -> Path:
    """Return the report path placed next to the store file."""

    return store_path.with_name(f"{store_path.stem}_report.xlsx")


def write_excel_report(data: ReportData, destination: Path) -> Path:
    """Write sheets ``Invoices`` and ``Summary`` with amounts rounded to 2 dp."""

    destination.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    invoices_ws = workbook.active
    invoices_ws.title = "Invoices"
    invoices_ws.append(
        [
            "Id",
            "Number",
            "Date",
            "Customer",
            "Subtotal",
            "CGST",
            "SGST",
            "Grand total",
            "Paid",
            "Due",
        ]
    )
    for row in data.rows:
        invoices_ws.append(
            [
                row.invoice_id,
                row.invoice_number,
                row.invoice_date,
                row.customer_name,
                round_currency(row.subtotal),
                round_currency(row.cgst_amount),
                round_currency(row.sgst_amount),
                round_currency(row.grand_total),
                round_currency(row.paid),
                round_currency(row.due),
            ]
        )

    summary_ws = workbook.create_sheet(title="Summary")
    summary_ws.append(["Customer", "Invoices", "Subtotal", "Tax", "Grand total", "Paid", "Due"])

    def _append_totals(label: str, totals: ReportTotals) -> None:
        summary_ws.append(
            [
                label,
                totals.count,
                round_currency(totals.subtotal),
                round_currency(totals.tax_total),
                round_currency(totals.grand_total),
                round_currency(totals.paid),
                round_currency(totals.due),
            ]
        )

    for customer in sorted(data.totals_by_customer):
        _append_totals(customer, data.totals_by_customer[customer])

    summary_ws.append([])
    _append_totals("Total", data.overall_totals)

    workbook.save(destination)
    return destination


__all__ = [
    "InvoiceRow",
    "ReportData",
    "ReportTotals",
    "default_report_destination",
    "summarise_invoices",
    "write_excel_report",
]
