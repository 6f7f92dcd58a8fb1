import pytest
from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from app.renderers.files import transient_file, EXPORT_DIR
from app.renderers.pdf_renderer import compute_tax, build_invoice_document, render_invoice_pdf, CONTENT_RIGHT, \
    FOOTER_TOP, PAGE_HEIGHT
from tests.helper import make_invoice

IST = ZoneInfo("Asia/Kolkata")


@pytest.mark.parametrize(
    "subtotal, expected",
    [
        (Decimal("4250"), Decimal("765")),
        (Decimal("0"), Decimal("0")),
        (Decimal("2551.50"), Decimal("459")),
        (Decimal("2.50"), Decimal("0")),
        (Decimal("2.78"), Decimal("1")),
    ]
)
def test_compute_tax_rounds_half_up(subtotal, expected):
    assert compute_tax(subtotal) == expected


def test_build_invoice_document_totals(owner_id):
    invoice = make_invoice(owner_id, invoice_number=1001, rate_per_ton="850", trucks=5)

    doc = build_invoice_document(invoice, tz=IST)

    assert doc.subtotal == Decimal("4250")
    assert doc.tax == Decimal("765")
    assert doc.grand_total == Decimal("5015")
    assert doc.totals == (("Sub Total:", "Rs. 4,250"), ("GST (18%):", "Rs. 765"), ("TOTAL:", "Rs. 5,015"))
    assert doc.line_item == ("1", "Sand Delivery", "5", "Rs. 850", "Rs. 4,250", "Rs. 4,250")


def test_build_invoice_document_header_and_bill_to(owner_id):
    invoice = make_invoice(owner_id, created_at=datetime(2025, 8, 18, 6, 30, tzinfo=timezone.utc))
    generated = datetime(2025, 8, 19, 4, 0, tzinfo=timezone.utc)

    doc = build_invoice_document(invoice, generated_at=generated, tz=IST)
    lines = doc.text_lines()

    assert doc.invoice_lines == ("Invoice #: 1001", "Date: 18/08/2025", "Time: 12:00 PM")
    assert "Customer Name: ABC Transport" in lines
    assert "Phone: N/A" in lines
    assert "GST Number: Y" in lines
    assert "Address: X" in lines
    assert "Generated on: 19/08/2025 09:30 AM" in lines
    assert "Notes/Instructions:" not in lines


def test_build_invoice_document_includes_notes(owner_id):
    invoice = make_invoice(owner_id, company_phone="+91 90000 00000", notes="Gate 3 only")

    lines = build_invoice_document(invoice).text_lines()

    assert "Phone: +91 90000 00000" in lines
    assert lines[lines.index("Notes/Instructions:") + 1] == "Gate 3 only"


def test_render_invoice_pdf_writes_single_page(tmp_path, owner_id):
    doc = build_invoice_document(make_invoice(owner_id), tz=IST)
    path = tmp_path / "invoice.pdf"

    render_invoice_pdf(doc, path, compress=False)

    data = path.read_bytes()
    assert data.startswith(b"%PDF-")
    assert b"/Count 1" in data
    assert b"Rs. 5,015" in data
    assert b"Invoice #: 1001" in data


def _record_draw_string(mocker) -> list[tuple]:
    drawn = []
    original = canvas.Canvas.drawString

    def record(self, x, y, text, *args, **kwargs):
        drawn.append((x, y, text, self._fontname, self._fontsize))
        return original(self, x, y, text, *args, **kwargs)

    mocker.patch.object(canvas.Canvas, "drawString", autospec=True, side_effect=record)
    return drawn


def _notes_lines(drawn: list[tuple]) -> list[tuple]:
    texts = [text for _, _, text, _, _ in drawn]
    start = texts.index("Notes/Instructions:") + 1
    return drawn[start:texts.index("Payment Terms: As per agreement")]


def test_long_notes_and_address_stay_inside_the_page(tmp_path, owner_id, mocker):
    notes = ("Deliver to gate 3 before noon and call the site manager on arrival. " * 30)[:2000].strip()
    token = "Plot-" + "7" * 150
    address = (f"{token} Industrial Estate Road, Near Old Bridge, " * 10)[:500].strip()
    drawn = _record_draw_string(mocker)
    doc = build_invoice_document(make_invoice(owner_id, company_address=address, notes=notes), tz=IST)

    render_invoice_pdf(doc, tmp_path / "invoice.pdf", compress=False)

    for x, y, text, font, size in drawn:
        assert x + stringWidth(text, font, size) <= CONTENT_RIGHT + 0.01, text
        assert y > 0, text
    notes_lines = _notes_lines(drawn)
    assert " ".join(text for _, _, text, _, _ in notes_lines) == " ".join(notes.split())
    assert notes_lines[-1][1] > PAGE_HEIGHT - FOOTER_TOP
    assert address.replace(" ", "") in "".join(text for _, _, text, _, _ in drawn).replace(" ", "")
    assert b"/Count 1" in (tmp_path / "invoice.pdf").read_bytes()


def test_notes_too_long_for_the_page_are_cut_and_footer_keeps_its_place(tmp_path, owner_id, mocker):
    drawn = _record_draw_string(mocker)
    doc = build_invoice_document(make_invoice(owner_id, company_address="W" * 500, notes="W" * 2000), tz=IST)

    render_invoice_pdf(doc, tmp_path / "invoice.pdf", compress=False)

    notes_lines = _notes_lines(drawn)
    assert notes_lines[-1][2].endswith("...")
    assert sum(len(text) for _, _, text, _, _ in notes_lines) < 2000
    signature = next(entry for entry in drawn if entry[2] == "Authorized Signature")
    assert signature[1] == pytest.approx(PAGE_HEIGHT - FOOTER_TOP - 70)
    for x, _, text, font, size in notes_lines:
        assert x + stringWidth(text, font, size) <= CONTENT_RIGHT + 0.01


def test_transient_file_removed_when_render_fails():
    with pytest.raises(RuntimeError):
        with transient_file("broken_", ".pdf") as path:
            path.write_bytes(b"partial")
            raise RuntimeError("render failed")

    assert path.parent == EXPORT_DIR
    assert not path.exists()


def test_transient_file_kept_on_success():
    with transient_file("ok_", ".csv") as path:
        path.write_text("x", encoding="utf-8")
    try:
        assert path.exists()
    finally:
        path.unlink(missing_ok=True)
