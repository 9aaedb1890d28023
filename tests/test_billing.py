from datetime import date

import pytest

from tutor_backend.app.core.exceptions import MalformedInputError
from tutor_backend.app.models.session_record import SessionRecord
from tutor_backend.app.services.billing import calculate_total_amount, refresh_total_amount, resolve_month


def test_calculate_total_amount_basic():
    assert calculate_total_amount(2, 200000) == 400000
    assert calculate_total_amount(0, 200000) == 0
    assert calculate_total_amount(None, 200000) == 0
    assert calculate_total_amount(3, None) == 0


def test_calculate_total_amount_handles_large_sums():
    assert calculate_total_amount(10_000, 5_000_000) == 50_000_000_000


def test_refresh_total_amount_overwrites_stored_value():
    record = SessionRecord(hours=3, price_per_hour=150000, total_amount=1)
    refresh_total_amount(record)
    assert record.total_amount == 450000


def test_resolve_month_derives_from_date_or_validates_given_key():
    assert resolve_month(date(2024, 2, 29), None) == "2024-02"
    assert resolve_month(date(2024, 2, 29), "2024-03") == "2024-03"
    with pytest.raises(MalformedInputError):
        resolve_month(date(2024, 2, 29), "2024-3")
