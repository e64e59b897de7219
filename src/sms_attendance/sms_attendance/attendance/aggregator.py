from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional

from ..breaks.ledger import BreakLedger
from ..breaks.model import BreakInterval
from ..common.datetime_utils import mins_to_hhmm, whole_minutes_between
from .model import DailyAttendanceRecord, DailyTotals


class DailyRecordAggregator:
    """Standard rule: net = (last_out - first_in) - closed breaks, not below 0."""

    def recompute(
        self,
        *,
        work_date: date,
        staff_id: str,
        intervals: Iterable[BreakInterval],
        first_in: Optional[datetime],
        last_out: Optional[datetime],
    ) -> DailyTotals:
        ledger = BreakLedger.for_key(staff_id, work_date, intervals)
        break_minutes = ledger.closed_minutes()

        if first_in is None or last_out is None:
            return DailyTotals(break_minutes=break_minutes, net_minutes=0)

        gross = whole_minutes_between(first_in, last_out)
        return DailyTotals(break_minutes=break_minutes, net_minutes=max(0, gross - break_minutes))

    def refresh(self, record: DailyAttendanceRecord, intervals: Iterable[BreakInterval]) -> DailyAttendanceRecord:
        totals = self.recompute(
            work_date=record.work_date,
            staff_id=record.staff_id,
            intervals=intervals,
            first_in=record.first_in,
            last_out=record.last_out,
        )
        return replace(record, break_minutes=totals.break_minutes, net_minutes=totals.net_minutes)

    @staticmethod
    def format_totals(record: DailyAttendanceRecord) -> tuple[str, str]:
        return mins_to_hhmm(record.break_minutes), mins_to_hhmm(record.net_minutes)
