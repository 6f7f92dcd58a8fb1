"""Single-page A4 invoice document.

The text of the page is assembled into an ``InvoiceDocument`` first and
then drawn with ReportLab, so every printed value (including the GST and
grand total) can be checked without parsing the PDF.

Tax policy: GST at ``GST_RATE`` is always added on top of the stored
invoice total and rounded half-up to a whole rupee.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from app.core.config import (DOCUMENT_TITLE, ISSUER_NAME, ISSUER_TAGLINE, ISSUER_PHONE, ISSUER_GST, SYSTEM_NAME,
                             GST_RATE)
from app.core.dates import TZ
from app.domain.invoices.models import Invoice
from app.renderers.formatting import format_inr, format_date, format_time

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 57
CONTENT_RIGHT = PAGE_WIDTH - MARGIN
CONTENT_WIDTH = CONTENT_RIGHT - MARGIN
RIGHT_COLUMN_X = 350

LINE_DESCRIPTION = "Sand Delivery"
TABLE_COLUMNS = (
    ("S. No.", 40, "center"),
    ("Description", 120, "left"),
    ("Trucks (Qty)", 70, "center"),
    ("Rate/Ton (Rs.)", 80, "right"),
    ("Amount (Rs.)", 90, "right"),
    ("Total (Rs.)", 81, "right"),
)
HEADER_HEIGHT = 30
ROW_HEIGHT = 25
FOOTER_TOP = PAGE_HEIGHT - 150
FOOTER_GAP = 40
NOTES_MAX_FONT = 10
NOTES_MIN_FONT = 5


def compute_tax(subtotal: Decimal, rate: Decimal = Decimal(GST_RATE)) -> Decimal:
    return (subtotal * rate).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class InvoiceDocument:
    title: str
    issuer_lines: tuple[str, ...]
    invoice_lines: tuple[str, ...]
    bill_to_lines: tuple[str, ...]
    line_item: tuple[str, ...]
    subtotal: Decimal
    tax: Decimal
    grand_total: Decimal
    totals: tuple[tuple[str, str], ...]
    notes: str | None
    footer_lines: tuple[str, ...]
    system_lines: tuple[str, ...] = field(default_factory=tuple)

    def text_lines(self) -> list[str]:
        lines = [self.title, *self.issuer_lines, *self.invoice_lines, "BILL TO:", *self.bill_to_lines]
        lines.extend(self.line_item)
        lines.extend(f"{label} {value}" for label, value in self.totals)
        if self.notes:
            lines.extend(["Notes/Instructions:", self.notes])
        lines.extend(self.footer_lines)
        lines.extend(self.system_lines)
        return lines


def build_invoice_document(
        invoice: Invoice,
        *,
        generated_at: datetime | None = None,
        tz: tzinfo = TZ
) -> InvoiceDocument:
    generated_at = generated_at or datetime.now(timezone.utc)
    subtotal = Decimal(invoice.total)
    tax = compute_tax(subtotal)
    grand_total = subtotal + tax
    gst_percent = (Decimal(GST_RATE) * 100).normalize()

    return InvoiceDocument(
        title=DOCUMENT_TITLE,
        issuer_lines=(ISSUER_NAME, ISSUER_TAGLINE, f"Phone: {ISSUER_PHONE}", f"GST: {ISSUER_GST}"),
        invoice_lines=(
            f"Invoice #: {invoice.invoice_number}",
            f"Date: {format_date(invoice.created_at, tz)}",
            f"Time: {format_time(invoice.created_at, tz)}",
        ),
        bill_to_lines=(
            f"Customer Name: {invoice.company_name}",
            f"Phone: {invoice.company_phone or 'N/A'}",
            f"GST Number: {invoice.company_gst}",
            f"Address: {invoice.company_address}",
        ),
        line_item=(
            "1",
            LINE_DESCRIPTION,
            str(invoice.trucks),
            format_inr(invoice.rate_per_ton),
            format_inr(subtotal),
            format_inr(subtotal),
        ),
        subtotal=subtotal,
        tax=tax,
        grand_total=grand_total,
        totals=(
            ("Sub Total:", format_inr(subtotal)),
            (f"GST ({gst_percent}%):", format_inr(tax)),
            ("TOTAL:", format_inr(grand_total)),
        ),
        notes=invoice.notes or None,
        footer_lines=("Payment Terms: As per agreement", "Due Date: Immediate", "Authorized Signature"),
        system_lines=(
            f"Generated on: {format_date(generated_at, tz)} {format_time(generated_at, tz)}",
            f"System: {SYSTEM_NAME}",
        ),
    )


def _y(from_top: float) -> float:
    return PAGE_HEIGHT - from_top


def _draw_aligned(c: canvas.Canvas, text: str, x: float, width: float, y: float, align: str) -> None:
    if align == "center":
        c.drawCentredString(x + width / 2, y, text)
    elif align == "right":
        c.drawRightString(x + width - 3, y, text)
    else:
        c.drawString(x + 3, y, text)


def _draw_header(c: canvas.Canvas, doc: InvoiceDocument) -> float:
    c.setFont("Helvetica-Bold", 18)
    c.drawCentredString(PAGE_WIDTH / 2, _y(MARGIN + 18), doc.title)

    top = MARGIN + 50
    c.setFont("Helvetica-Bold", 12)
    c.drawString(MARGIN, _y(top), doc.issuer_lines[0])
    c.setFont("Helvetica", 10)
    for i, line in enumerate(doc.issuer_lines[1:], start=1):
        c.drawString(MARGIN, _y(top + i * 15), line)

    c.setFont("Helvetica-Bold", 11)
    for i, line in enumerate(doc.invoice_lines):
        c.drawString(RIGHT_COLUMN_X, _y(top + i * 15), line)

    separator = top + len(doc.issuer_lines) * 15 + 5
    c.line(MARGIN, _y(separator), CONTENT_RIGHT, _y(separator))
    return separator + 25


def _wrap(text: str, font: str, size: float, width: float) -> list[str]:
    lines = []
    for line in simpleSplit(text, font, size, width):
        while stringWidth(line, font, size) > width:
            cut = len(line) - 1
            while cut > 1 and stringWidth(line[:cut], font, size) > width:
                cut -= 1
            lines.append(line[:cut])
            line = line[cut:]
        lines.append(line)
    return lines


def _draw_bill_to(c: canvas.Canvas, doc: InvoiceDocument, top: float) -> float:
    c.setFont("Helvetica-Bold", 12)
    c.drawString(MARGIN, _y(top), "BILL TO:")
    c.line(MARGIN, _y(top + 5), 300, _y(top + 5))
    c.setFont("Helvetica", 10)
    row = 0
    for line in doc.bill_to_lines:
        for part in _wrap(line, "Helvetica", 10, CONTENT_WIDTH):
            row += 1
            c.drawString(MARGIN, _y(top + 5 + row * 15), part)
    return top + 5 + row * 15 + 25


def _draw_table(c: canvas.Canvas, doc: InvoiceDocument, top: float) -> float:
    width = sum(col_width for _, col_width, _ in TABLE_COLUMNS)
    c.rect(MARGIN, _y(top + HEADER_HEIGHT), width, HEADER_HEIGHT)
    c.rect(MARGIN, _y(top + HEADER_HEIGHT + ROW_HEIGHT), width, ROW_HEIGHT)

    x = MARGIN
    for (title, col_width, align), value in zip(TABLE_COLUMNS, doc.line_item):
        if x > MARGIN:
            c.line(x, _y(top), x, _y(top + HEADER_HEIGHT + ROW_HEIGHT))
        c.setFont("Helvetica-Bold", 9)
        c.drawCentredString(x + col_width / 2, _y(top + 19), title)
        c.setFont("Helvetica", 9)
        _draw_aligned(c, value, x, col_width, _y(top + HEADER_HEIGHT + 16), align)
        x += col_width
    return top + HEADER_HEIGHT + ROW_HEIGHT + 20


def _draw_totals(c: canvas.Canvas, doc: InvoiceDocument, top: float) -> float:
    left = MARGIN + 310
    for i, (label, value) in enumerate(doc.totals):
        c.setFont("Helvetica-Bold" if i == len(doc.totals) - 1 else "Helvetica", 10)
        c.drawString(left, _y(top + i * 15), label)
        c.drawRightString(CONTENT_RIGHT, _y(top + i * 15), value)
    return top + len(doc.totals) * 15 + 20


def _fit_notes(notes: str, height: float) -> tuple[int, list[str]]:
    for size in range(NOTES_MAX_FONT, NOTES_MIN_FONT - 1, -1):
        lines = _wrap(notes, "Helvetica", size, CONTENT_WIDTH)
        if len(lines) * (size + 2) <= height:
            return size, lines
    # still too long at the smallest size: cut so the footer stays on the page
    keep = max(1, int(height // (NOTES_MIN_FONT + 2)))
    if len(lines) > keep:
        lines = lines[:keep]
        last = lines[-1]
        while last and stringWidth(last + "...", "Helvetica", NOTES_MIN_FONT) > CONTENT_WIDTH:
            last = last[:-1]
        lines[-1] = last + "..."
    return NOTES_MIN_FONT, lines


def _draw_notes(c: canvas.Canvas, doc: InvoiceDocument, top: float) -> float:
    if not doc.notes:
        return top
    c.setFont("Helvetica-Bold", 10)
    c.drawString(MARGIN, _y(top), "Notes/Instructions:")
    size, lines = _fit_notes(doc.notes, FOOTER_TOP - FOOTER_GAP - (top + 15))
    c.setFont("Helvetica", size)
    for i, line in enumerate(lines):
        c.drawString(MARGIN, _y(top + 15 + i * (size + 2)), line)
    return top + 15 + len(lines) * (size + 2)


def _draw_footer(c: canvas.Canvas, doc: InvoiceDocument, top: float) -> None:
    top = max(top + FOOTER_GAP, FOOTER_TOP)
    terms, due, signature = doc.footer_lines
    c.setFont("Helvetica", 10)
    c.drawString(MARGIN, _y(top), terms)
    c.drawString(MARGIN, _y(top + 15), due)
    c.line(MARGIN, _y(top + 55), 200, _y(top + 55))
    c.drawString(MARGIN, _y(top + 70), signature)

    c.setFont("Helvetica", 8)
    for i, line in enumerate(doc.system_lines):
        c.drawString(RIGHT_COLUMN_X, _y(top + 70 + i * 12), line)


def render_invoice_pdf(doc: InvoiceDocument, path: Path, *, compress: bool = True) -> Path:
    c = canvas.Canvas(str(path), pagesize=A4, invariant=1, pageCompression=1 if compress else 0)
    c.setTitle(f"{doc.title} {doc.invoice_lines[0]}")

    top = _draw_header(c, doc)
    top = _draw_bill_to(c, doc, top)
    top = _draw_table(c, doc, top)
    top = _draw_totals(c, doc, top)
    top = _draw_notes(c, doc, top)
    _draw_footer(c, doc, top)

    c.showPage()
    c.save()
    return path
