from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailyAttendanceRecord


class DailyAttendanceRepository(Protocol):
    """Daily attendance persistence, one row per (work_date, staff_id)."""

    def get_for_staff_and_date(self, staff_id: str, work_date: date) -> Optional[DailyAttendanceRecord]:
        raise NotImplementedError

    def save(self, record: DailyAttendanceRecord) -> None:
        """Insert the record, or overwrite the existing row for its key."""

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[DailyAttendanceRecord]:
        raise NotImplementedError
