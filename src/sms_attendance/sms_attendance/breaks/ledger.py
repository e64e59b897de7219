from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.enums import BreakStatus
from .model import BreakInterval


@dataclass(frozen=True)
class BreakLedger:
    """Read-only view over the break intervals of one (staff, day) key.

    Intervals belonging to other keys are filtered out on construction so the
    queries never depend on how the store orders or groups its rows.
    """

    staff_id: str
    work_date: date
    intervals: tuple[BreakInterval, ...]

    @classmethod
    def for_key(cls, staff_id: str, work_date: date, intervals: Iterable[BreakInterval]) -> "BreakLedger":
        own = tuple(i for i in intervals if i.staff_id == staff_id and i.work_date == work_date)
        return cls(staff_id=staff_id, work_date=work_date, intervals=own)

    def open_intervals(self) -> list[BreakInterval]:
        return [i for i in self.intervals if i.status == BreakStatus.OPEN]

    def latest_open(self) -> Optional[BreakInterval]:
        """The OPEN interval with the latest start, if any."""
        opened = self.open_intervals()
        if not opened:
            return None
        return max(opened, key=lambda i: i.start)

    def last_closed(self) -> Optional[BreakInterval]:
        """The CLOSED interval that ended last, if any."""
        closed = [i for i in self.intervals if i.status == BreakStatus.CLOSED and i.end is not None]
        if not closed:
            return None
        return max(closed, key=lambda i: i.end)

    def closed_minutes(self) -> int:
        return sum(int(i.minutes or 0) for i in self.intervals if i.status == BreakStatus.CLOSED)
