from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

TZ = ZoneInfo("Asia/Ho_Chi_Minh")
WORK_DATE = date(2026, 2, 2)
PHONE = "+84 901 234 567"


def at(hour: int, minute: int = 0, second: int = 0, *, day: date = WORK_DATE) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=TZ)
