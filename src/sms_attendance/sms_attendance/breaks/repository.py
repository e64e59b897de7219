from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, Sequence

from .model import BreakInterval


class BreakRepository(Protocol):
    """Break-interval persistence used by the attendance service."""

    def list_for(self, staff_id: str, work_date: date) -> Sequence[BreakInterval]:
        raise NotImplementedError

    def create_open(self, interval: BreakInterval) -> None:
        raise NotImplementedError

    def close(self, *, staff_id: str, work_date: date, start: datetime, end: datetime, minutes: int) -> bool:
        """Close the OPEN interval identified by (work_date, staff_id, start)."""

        raise NotImplementedError
