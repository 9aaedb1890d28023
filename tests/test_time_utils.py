from datetime import UTC, date

from tutor_backend.app.core.time import today_utc, utc_now


def test_utc_now_is_timezone_aware_utc():
    value = utc_now()
    assert value.tzinfo is UTC


def test_today_utc_is_plain_date():
    value = today_utc()
    assert isinstance(value, date)
    assert not hasattr(value, "tzinfo")
