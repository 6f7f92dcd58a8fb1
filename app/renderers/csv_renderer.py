import csv
from pathlib import Path
from typing import Iterable
from app.core.utils.serialization import iso_utc
from app.domain.invoices.models import Invoice
from app.renderers.formatting import plain_number

CSV_HEADER = (
    "DATE_ISO",
    "INVOICE_NUMBER",
    "COMPANY_NAME",
    "COMPANY_PHONE",
    "COMPANY_ADDRESS",
    "COMPANY_GST",
    "RATE_PER_TON",
    "TRUCKS",
    "TOTAL",
    "NOTES",
)


def invoice_row(invoice: Invoice) -> list[str]:
    return [
        iso_utc(invoice.created_at),
        str(invoice.invoice_number),
        invoice.company_name,
        invoice.company_phone or "",
        invoice.company_address,
        invoice.company_gst,
        plain_number(invoice.rate_per_ton),
        str(invoice.trucks),
        plain_number(invoice.total),
        invoice.notes or "",
    ]


def write_invoices_csv(invoices: Iterable[Invoice], path: Path) -> Path:
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(CSV_HEADER)
        for invoice in invoices:
            writer.writerow(invoice_row(invoice))
    return path
