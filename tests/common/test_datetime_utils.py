from __future__ import annotations

from datetime import date, datetime, time, timezone

import pytest

from src.sms_attendance.sms_attendance.common.datetime_utils import (
    coerce_optional_timestamp,
    coerce_timestamp,
    day_key,
    format_time_of_day,
    format_timestamp,
    hhmm_to_mins,
    mins_to_hhmm,
    rounded_minutes_between,
    whole_minutes_between,
)
from src.sms_attendance.sms_attendance.core.exceptions import ValidationError


def test_naive_datetime_is_read_in_configured_zone(tz):
    ts = coerce_timestamp(datetime(2026, 2, 2, 9, 0), tz)
    assert ts.tzinfo is tz
    assert ts.hour == 9


def test_aware_datetime_is_converted(tz):
    ts = coerce_timestamp(datetime(2026, 2, 2, 2, 0, tzinfo=timezone.utc), tz)
    assert (ts.hour, ts.minute) == (9, 0)


def test_string_layouts(tz):
    expected = datetime(2026, 2, 2, 9, 15, tzinfo=tz)
    assert coerce_timestamp("2026-02-02 09:15:00", tz) == expected
    assert coerce_timestamp("2026-02-02 09:15", tz) == expected
    assert coerce_timestamp("02/02/2026 09:15", tz) == expected
    assert coerce_timestamp("2026-02-02T02:15:00Z", tz) == expected


def test_time_of_day_needs_date(tz):
    assert coerce_timestamp("09:15", tz, on_date=date(2026, 2, 2)) == datetime(2026, 2, 2, 9, 15, tzinfo=tz)
    assert coerce_timestamp(time(9, 15, 30), tz, on_date=date(2026, 2, 2)).second == 30
    with pytest.raises(ValidationError):
        coerce_timestamp("09:15", tz)


def test_epoch_and_serial_numbers(tz):
    epoch = datetime(2026, 2, 2, 2, 0, tzinfo=timezone.utc).timestamp()
    assert coerce_timestamp(epoch, tz).hour == 9
    assert coerce_timestamp(int(epoch * 1000), tz).hour == 9
    assert coerce_timestamp(str(int(epoch)), tz).hour == 9
    # 2026-02-02 12:00 as a spreadsheet serial number
    serial = (date(2026, 2, 2) - date(1899, 12, 30)).days + 0.5
    assert coerce_timestamp(serial, tz) == datetime(2026, 2, 2, 12, 0, tzinfo=tz)


@pytest.mark.parametrize(
    "bad",
    ["not a time", "25:00", True, None, "", float("nan"), "20260202", 3_000_000, 10**20, "-5"],
)
def test_invalid_values_raise(tz, bad):
    with pytest.raises(ValidationError):
        coerce_timestamp(bad, tz)


def test_optional_blank_is_none(tz):
    assert coerce_optional_timestamp("  ", tz) is None
    assert coerce_optional_timestamp(None, tz) is None


def test_day_key_uses_configured_zone(tz):
    # 18:30 UTC is already the next day in UTC+7
    ts = datetime(2026, 2, 2, 18, 30, tzinfo=timezone.utc)
    assert day_key(ts, tz) == date(2026, 2, 3)


def test_storage_formats(tz):
    ts = datetime(2026, 2, 2, 9, 5, 7, tzinfo=tz)
    assert format_timestamp(ts, tz) == "2026-02-02 09:05:07"
    assert format_time_of_day(ts, tz) == "09:05:07"


def test_minute_arithmetic(tz):
    start = datetime(2026, 2, 2, 12, 0, tzinfo=tz)
    assert whole_minutes_between(start, start.replace(minute=30, second=59)) == 30
    assert rounded_minutes_between(start, start.replace(minute=30, second=30)) == 31
    assert rounded_minutes_between(start, start.replace(minute=30, second=29)) == 30
    assert whole_minutes_between(start, start.replace(hour=11)) == -60


def test_mins_to_hhmm_floors_and_clamps():
    assert mins_to_hhmm(510) == "08:30"
    assert mins_to_hhmm(59.9) == "00:59"
    assert mins_to_hhmm(-15) == "00:00"
    assert mins_to_hhmm(0) == "00:00"


def test_hhmm_round_trip_full_range():
    for hours in range(100):
        for minutes in range(60):
            text = f"{hours:02d}:{minutes:02d}"
            assert mins_to_hhmm(hhmm_to_mins(text)) == text


@pytest.mark.parametrize("bad", ["8.30", "08:60", "abc", "-01:00"])
def test_hhmm_rejects_malformed(bad):
    with pytest.raises(ValidationError):
        hhmm_to_mins(bad)


def test_hhmm_blank_is_zero():
    assert hhmm_to_mins("") == 0
