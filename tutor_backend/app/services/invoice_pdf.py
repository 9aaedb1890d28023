"""Render an invoice response as a one-or-more page A4 PDF."""

import logging
import os
from io import BytesIO
from typing import Optional

from reportlab.graphics import renderPDF
from reportlab.graphics.barcode import qr
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from tutor_backend.app.core.exceptions import InvoiceRenderError
from tutor_backend.app.core.settings import get_settings
from tutor_backend.app.schemas.invoice import InvoiceResponse
from tutor_backend.app.services.invoice_formatting import payment_reference

logger = logging.getLogger(__name__)

CUSTOM_FONT_NAME = "InvoiceFont"
# Searched in order when TUTOR_PDF_FONT_PATH is unset
FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/local/share/fonts/DejaVuSans.ttf",
    "/Library/Fonts/DejaVuSans.ttf",
    "C:/Windows/Fonts/DejaVuSans.ttf",
]
X_MARGIN = 18 * mm
BOTTOM_MARGIN = 20 * mm
ROW_HEIGHT = 7 * mm
QR_SIZE = 38 * mm
# (header, x offset from left margin, right aligned)
COLUMNS = [
    ("Ngày", 0, False),
    ("Nội dung", 28 * mm, False),
    ("Buổi", 100 * mm, True),
    ("Giờ", 115 * mm, True),
    ("Đơn giá", 142 * mm, True),
    ("Thành tiền", 174 * mm, True),
]

brand_blue = colors.HexColor("#1d4ed8")
muted = colors.HexColor("#64748b")
soft_border = colors.HexColor("#e2e8f0")


def format_vnd(amount: int) -> str:
    return f"{amount:,}".replace(",", ".") + " đ"


def _find_font_path() -> Optional[str]:
    configured = get_settings().pdf_font_path
    if configured:
        return configured
    for candidate in FONT_CANDIDATES:
        if os.path.exists(candidate):
            return candidate
    return None


def _resolve_font() -> str:
    font_path = _find_font_path()
    if not font_path:
        logger.warning("No Unicode TTF font found; Vietnamese text will not render correctly in invoice PDFs")
        return "Helvetica"
    if CUSTOM_FONT_NAME not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(CUSTOM_FONT_NAME, font_path))
    return CUSTOM_FONT_NAME


def render_invoice_pdf(invoice: InvoiceResponse) -> bytes:
    """Return PDF bytes for ``invoice``; any drawing failure becomes ``InvoiceRenderError``."""
    try:
        return _draw_invoice(invoice, _resolve_font())
    except Exception as exc:
        logger.exception("Failed to render PDF for invoice %s", invoice.invoice_number)
        raise InvoiceRenderError(f"Could not render PDF for invoice {invoice.invoice_number}") from exc


def _draw_invoice(invoice: InvoiceResponse, font: str) -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(invoice.invoice_number)
    width, height = A4

    # Header bar
    header_h = 26 * mm
    c.setFillColor(brand_blue)
    c.rect(0, height - header_h, width, header_h, fill=1, stroke=0)
    c.setFillColor(colors.white)
    c.setFont(font, 18)
    c.drawString(X_MARGIN, height - 13 * mm, "BÁO GIÁ HỌC PHÍ")
    c.setFont(font, 10)
    c.drawString(X_MARGIN, height - 20 * mm, invoice.month)
    c.drawRightString(width - X_MARGIN, height - 13 * mm, invoice.invoice_number)
    c.drawRightString(width - X_MARGIN, height - 20 * mm, f"Ngày lập: {invoice.created_date}")

    y = height - header_h - 12 * mm
    c.setFillColor(muted)
    c.setFont(font, 9)
    c.drawString(X_MARGIN, y, "Học sinh")
    c.setFillColor(colors.black)
    c.setFont(font, 12)
    c.drawString(X_MARGIN + 28 * mm, y, invoice.student_name)
    y -= 12 * mm

    y = _draw_table_header(c, font, y, width)
    for item in invoice.items:
        if y < BOTTOM_MARGIN + ROW_HEIGHT:
            c.showPage()
            y = _draw_table_header(c, font, height - BOTTOM_MARGIN, width)
        values = [
            item.date,
            item.description,
            str(item.sessions),
            str(item.hours),
            format_vnd(item.price_per_hour),
            format_vnd(item.amount),
        ]
        c.setFont(font, 9)
        c.setFillColor(colors.black)
        for (_, offset, right), value in zip(COLUMNS, values):
            if right:
                c.drawRightString(X_MARGIN + offset, y, value)
            else:
                c.drawString(X_MARGIN + offset, y, value)
        c.setStrokeColor(soft_border)
        c.line(X_MARGIN, y - 2.5 * mm, width - X_MARGIN, y - 2.5 * mm)
        y -= ROW_HEIGHT

    # Totals and payment block need room for the QR code
    if y < BOTTOM_MARGIN + QR_SIZE + 20 * mm:
        c.showPage()
        y = height - BOTTOM_MARGIN
    y -= 4 * mm
    c.setFont(font, 10)
    c.drawString(X_MARGIN, y, f"Tổng số buổi: {invoice.total_sessions}")
    c.drawString(X_MARGIN + 50 * mm, y, f"Tổng số giờ: {invoice.total_hours}")
    c.setFont(font, 13)
    c.setFillColor(brand_blue)
    c.drawRightString(width - X_MARGIN, y, f"Tổng cộng: {format_vnd(invoice.total_amount)}")
    y -= 14 * mm

    bank = invoice.bank_info
    c.setFillColor(colors.black)
    c.setFont(font, 10)
    for line in (
        "Thông tin chuyển khoản",
        f"Ngân hàng: {bank.bank_name}",
        f"Số tài khoản: {bank.account_number}",
        f"Chủ tài khoản: {bank.account_name}",
        f"Nội dung: {payment_reference(invoice.invoice_number)}",
    ):
        c.drawString(X_MARGIN, y, line)
        y -= 6 * mm

    qr_widget = qr.QrCodeWidget(invoice.qr_code_url)
    bounds = qr_widget.getBounds()
    qr_w = bounds[2] - bounds[0]
    qr_h = bounds[3] - bounds[1]
    drawing = Drawing(QR_SIZE, QR_SIZE, transform=[QR_SIZE / qr_w, 0, 0, QR_SIZE / qr_h, 0, 0])
    drawing.add(qr_widget)
    renderPDF.draw(drawing, c, width - X_MARGIN - QR_SIZE, y)
    c.setFont(font, 7.5)
    c.setFillColor(muted)
    c.drawRightString(width - X_MARGIN, y - 4 * mm, "Quét mã để mở mã VietQR thanh toán")

    c.showPage()
    c.save()
    pdf_bytes = buf.getvalue()
    buf.close()
    return pdf_bytes


def _draw_table_header(c: canvas.Canvas, font: str, y: float, width: float) -> float:
    c.setFont(font, 9)
    c.setFillColor(muted)
    for title, offset, right in COLUMNS:
        if right:
            c.drawRightString(X_MARGIN + offset, y, title)
        else:
            c.drawString(X_MARGIN + offset, y, title)
    c.setStrokeColor(colors.black)
    c.line(X_MARGIN, y - 2.5 * mm, width - X_MARGIN, y - 2.5 * mm)
    return y - ROW_HEIGHT
