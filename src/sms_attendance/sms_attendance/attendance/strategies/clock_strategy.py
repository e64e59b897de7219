from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from ...breaks.ledger import BreakLedger
from ...core.enums import Rejection
from ..model import DailyAttendanceRecord
from .base import Transition, TransitionStrategy


class ClockInStrategy(TransitionStrategy):
    """Keep the earliest IN of the day. Never rejected."""

    def decide(self, *, at: datetime, record: DailyAttendanceRecord, ledger: BreakLedger) -> Transition:
        if record.first_in is not None and at >= record.first_in:
            return Transition(record=record)
        return Transition(record=replace(record, first_in=at))


class ClockOutStrategy(TransitionStrategy):
    """Keep the latest OUT of the day, unless a break is still running."""

    def decide(self, *, at: datetime, record: DailyAttendanceRecord, ledger: BreakLedger) -> Transition:
        if ledger.latest_open() is not None:
            return Transition(rejection=Rejection.OPEN_BREAK_ON_OUT)

        last = ledger.last_closed()
        if last is not None and at < last.end:
            return Transition(rejection=Rejection.OUT_BEFORE_BREAK_OUT)

        if record.last_out is not None and at <= record.last_out:
            return Transition(record=record)
        return Transition(record=replace(record, last_out=at))
