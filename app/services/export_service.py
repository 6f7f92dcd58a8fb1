import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from uuid import UUID
from anyio import to_thread
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.dates import DateRange, TZ
from app.domain.invoices import crud
from app.renderers.csv_renderer import write_invoices_csv
from app.renderers.files import transient_file
from app.renderers.pdf_renderer import build_invoice_document, render_invoice_pdf
from app.services import invoices_service


logger = logging.getLogger("app.exports")


@dataclass(frozen=True)
class ExportFile:
    path: Path
    filename: str
    media_type: str


def _render_csv(invoices, prefix: str) -> Path:
    with transient_file(prefix, ".csv") as path:
        write_invoices_csv(invoices, path)
    return path


def _render_pdf(document, prefix: str) -> Path:
    with transient_file(prefix, ".pdf") as path:
        render_invoice_pdf(document, path)
    return path


def _day_label(value: datetime) -> str:
    return value.astimezone(TZ).strftime("%Y-%m-%d")


async def export_csv(db: AsyncSession, owner_id: UUID, date_range: DateRange) -> ExportFile:
    invoices = await crud.list_invoices_in_range(db, owner_id, date_range)
    path = await to_thread.run_sync(_render_csv, invoices, "invoices_")
    logger.info("CSV export with %d rows written to %s", len(invoices), path.name)
    filename = f"invoices_{_day_label(date_range.start)}_{_day_label(date_range.end)}.csv"
    return ExportFile(path=path, filename=filename, media_type="text/csv")


async def export_pdf(db: AsyncSession, owner_id: UUID, invoice_id: int) -> ExportFile:
    invoice = await invoices_service.get_invoice(db, owner_id, invoice_id)
    document = build_invoice_document(invoice)
    path = await to_thread.run_sync(_render_pdf, document, f"Invoice_{invoice.invoice_number}_")
    logger.info("PDF for invoice %s written to %s", invoice.invoice_number, path.name)
    return ExportFile(path=path, filename=f"Invoice_{invoice.invoice_number}.pdf", media_type="application/pdf")
