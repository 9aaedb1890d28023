"""Billing helpers for session records."""

from datetime import date

from tutor_backend.app.models.session_record import SessionRecord
from tutor_backend.app.services.invoice_formatting import month_key, parse_month


def calculate_total_amount(hours: int | None, price_per_hour: int | None) -> int:
    """Amount owed for a record; stored amounts are always derived from hours and price."""
    if not hours or not price_per_hour:
        return 0
    if hours < 0 or price_per_hour < 0:
        return 0
    return hours * price_per_hour


def resolve_month(session_date: date, month: str | None) -> str:
    if month is None:
        return month_key(session_date)
    parse_month(month)
    return month


def refresh_total_amount(record: SessionRecord) -> SessionRecord:
    record.total_amount = calculate_total_amount(record.hours, record.price_per_hour)
    return record
