from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class DailyAttendanceRecord:
    """Domain entity: one staff member's attendance for one calendar day.

    ``break_minutes`` and ``net_minutes`` are derived values; they are always
    recomputed from the break ledger and first_in/last_out.
    """

    work_date: date
    staff_id: str
    display_name: str = ""
    present: bool = False
    first_in: Optional[datetime] = None
    last_out: Optional[datetime] = None
    break_minutes: int = 0
    net_minutes: int = 0


@dataclass(frozen=True)
class DailyTotals:
    break_minutes: int
    net_minutes: int
