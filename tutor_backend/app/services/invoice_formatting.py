"""Display helpers for invoices: date/month labels, numbers and VietQR links."""

import re
from datetime import date
from typing import Tuple
from urllib.parse import urlencode

from tutor_backend.app.core.exceptions import MalformedInputError
from tutor_backend.app.core.settings import get_settings

DATE_FORMAT = "%d/%m/%Y"
MONTH_KEY_RE = re.compile(r"(\d{4})-(\d{2})", re.ASCII)


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_month(month: str) -> Tuple[int, int]:
    """Split a ``YYYY-MM`` key into ``(year, month)``."""
    match = MONTH_KEY_RE.fullmatch(month or "")
    if match is None or not 1 <= int(match.group(2)) <= 12:
        raise MalformedInputError(f"Invalid month '{month}', expected YYYY-MM")
    return int(match.group(1)), int(match.group(2))


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def format_month(month: str) -> str:
    year, month_number = parse_month(month)
    return f"Tháng {month_number}/{year}"


def build_invoice_number(month: str, sequence: int, suffix: str = "") -> str:
    # Display label only: the sequence comes from a record count and is not unique
    year, month_number = parse_month(month)
    return f"INV-{year:04d}-{month_number:02d}-{sequence:03d}{suffix}"


def payment_reference(invoice_number: str) -> str:
    """Transfer note the payer should enter; the hyphen-stripped invoice number."""
    return invoice_number.replace("-", "")


def build_vietqr_url(amount: int, invoice_number: str) -> str:
    settings = get_settings()
    image = f"{settings.bank_code}-{settings.bank_account_number}-{settings.vietqr_template}.png"
    query = urlencode({"amount": amount, "addInfo": payment_reference(invoice_number)})
    return f"{settings.vietqr_base_url}/{image}?{query}"


def invoice_pdf_filename(month: str, invoice_number: str, all_students: bool) -> str:
    if all_students:
        return f"Bao-Gia-Tong-{month}.pdf"
    return f"Bao-Gia-{invoice_number}.pdf"
