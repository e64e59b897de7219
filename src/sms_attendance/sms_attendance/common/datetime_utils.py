from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo

from ..core.constants import DATE_FORMAT, TIME_OF_DAY_FORMAT, TIMESTAMP_FORMAT
from ..core.exceptions import ValidationError

# Day 0 of the spreadsheet serial calendar (Lotus/Sheets epoch).
_SERIAL_EPOCH = datetime(1899, 12, 30)
_EPOCH_MS_THRESHOLD = 100_000_000_000
_EPOCH_S_THRESHOLD = 1_000_000_000

_DATETIME_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
)
_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%Y/%m/%d")
_TIME_OF_DAY = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_NUMERIC = re.compile(r"^-?\d+(\.\d+)?$")


def get_zone(name: str) -> ZoneInfo:
    """Resolve an IANA zone name, raising ValidationError for unknown names."""
    try:
        return ZoneInfo(name)
    except (KeyError, ValueError) as e:
        raise ValidationError(f"Unknown time zone: {name!r}") from e


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid date: {value!r}") from e


def now_local(tz: tzinfo) -> datetime:
    """Current time in the configured zone.

    Note: Wrapped so tests can patch the clock.
    """
    return datetime.now(tz)


def _localize(value: datetime, tz: tzinfo) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def _from_number(value: float, tz: tzinfo) -> datetime:
    if value < 0:
        raise ValidationError(f"Invalid timestamp: {value!r}")
    try:
        if value >= _EPOCH_MS_THRESHOLD:
            return datetime.fromtimestamp(value / 1000.0, tz)
        if value >= _EPOCH_S_THRESHOLD:
            return datetime.fromtimestamp(value, tz)
        # Serial numbers carry local wall-clock time, not UTC.
        return _localize(_SERIAL_EPOCH + timedelta(days=value), tz)
    except (OverflowError, OSError, ValueError) as e:
        raise ValidationError(f"Timestamp out of range: {value!r}") from e


def _combine(on_date: Optional[date], clock: time, tz: tzinfo, raw: Any) -> datetime:
    if on_date is None:
        raise ValidationError(f"Time of day {raw!r} needs a calendar date")
    return datetime.combine(on_date, clock.replace(tzinfo=None)).replace(tzinfo=tz)


def _from_string(text: str, tz: tzinfo, on_date: Optional[date]) -> datetime:
    m = _TIME_OF_DAY.match(text)
    if m:
        hours, minutes, seconds = int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)
        if hours > 23 or minutes > 59 or seconds > 59:
            raise ValidationError(f"Invalid time of day: {text!r}")
        return _combine(on_date, time(hours, minutes, seconds), tz, text)

    if _NUMERIC.match(text):
        return _from_number(float(text), tz)

    for fmt in _DATETIME_FORMATS:
        try:
            return _localize(datetime.strptime(text, fmt), tz)
        except ValueError:
            continue
    for fmt in _DATE_FORMATS:
        try:
            return _localize(datetime.strptime(text, fmt), tz)
        except ValueError:
            continue

    try:
        return _localize(datetime.fromisoformat(text.replace("Z", "+00:00")), tz)
    except ValueError as e:
        raise ValidationError(f"Unrecognized timestamp: {text!r}") from e


def coerce_timestamp(value: Any, tz: tzinfo, *, on_date: Optional[date] = None) -> datetime:
    """Convert a stored or incoming time value into an aware datetime in ``tz``.

    Accepted inputs:
    - datetime (naive values are read as wall-clock time in ``tz``)
    - date (midnight)
    - time, or "HH:MM[:SS]" strings (combined with ``on_date``)
    - epoch seconds / milliseconds and spreadsheet serial day numbers
    - ISO-8601 and the common "date time" string layouts
    """

    if isinstance(value, datetime):
        return _localize(value, tz)
    if isinstance(value, date):
        return datetime.combine(value, time()).replace(tzinfo=tz)
    if isinstance(value, time):
        return _combine(on_date, value, tz, value)
    if isinstance(value, bool):
        raise ValidationError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        if math.isnan(value) or math.isinf(value):
            raise ValidationError(f"Invalid timestamp: {value!r}")
        return _from_number(float(value), tz)
    if isinstance(value, str) and value.strip():
        return _from_string(value.strip(), tz, on_date)
    raise ValidationError(f"Invalid timestamp: {value!r}")


def coerce_optional_timestamp(value: Any, tz: tzinfo, *, on_date: Optional[date] = None) -> Optional[datetime]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return coerce_timestamp(value, tz, on_date=on_date)


def day_key(ts: datetime, tz: tzinfo) -> date:
    """Calendar day of ``ts`` in the configured zone."""
    return _localize(ts, tz).date()


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_timestamp(ts: datetime, tz: tzinfo) -> str:
    return _localize(ts, tz).strftime(TIMESTAMP_FORMAT)


def format_time_of_day(ts: datetime, tz: tzinfo) -> str:
    return _localize(ts, tz).strftime(TIME_OF_DAY_FORMAT)


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Floor of (end - start) in minutes; negative when end precedes start."""
    return math.floor((end - start).total_seconds() / 60)


def rounded_minutes_between(start: datetime, end: datetime) -> int:
    """(end - start) in minutes, halves rounded up."""
    return math.floor((end - start).total_seconds() / 60 + 0.5)


def mins_to_hhmm(minutes: float) -> str:
    """Format minutes as HH:MM (floored, never negative)."""
    total = max(0, math.floor(minutes))
    return f"{total // 60:02d}:{total % 60:02d}"


def hhmm_to_mins(value: str) -> int:
    """Parse an HH:MM total back into minutes; blank means zero."""
    if value is None or not str(value).strip():
        return 0
    text = str(value).strip()
    m = re.match(r"^(\d+):(\d{2})$", text)
    if not m or int(m.group(2)) > 59:
        raise ValidationError(f"Invalid HH:MM value: {value!r}")
    return int(m.group(1)) * 60 + int(m.group(2))
