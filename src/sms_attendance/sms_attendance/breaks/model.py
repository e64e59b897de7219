from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import BreakStatus


@dataclass(frozen=True)
class BreakInterval:
    """Domain entity: one break taken by a staff member on a given day.

    Identity is (work_date, staff_id, start). ``end`` and ``minutes`` are only
    set once the interval is CLOSED.
    """

    work_date: date
    staff_id: str
    start: datetime
    end: Optional[datetime] = None
    minutes: Optional[int] = None
    status: BreakStatus = BreakStatus.OPEN

    @property
    def is_open(self) -> bool:
        return self.status == BreakStatus.OPEN
