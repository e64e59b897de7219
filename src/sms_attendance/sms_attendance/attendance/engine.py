from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional

from ..breaks.ledger import BreakLedger
from ..breaks.model import BreakInterval
from ..core.enums import NormalizedAction
from .aggregator import DailyRecordAggregator
from .factory import TransitionStrategyFactory
from .model import DailyAttendanceRecord
from .strategies.base import Transition


class ReconciliationEngine:
    """Pure state machine for one (staff, day) key.

    ``apply`` reads the current record and break intervals, decides the
    transition and returns it fully resolved (derived totals included). It
    never touches a store; persisting the result is the caller's job.
    """

    def __init__(
        self,
        *,
        strategy_factory: TransitionStrategyFactory | None = None,
        aggregator: DailyRecordAggregator | None = None,
    ):
        self._factory = strategy_factory or TransitionStrategyFactory()
        self._aggregator = aggregator or DailyRecordAggregator()

    def apply(
        self,
        *,
        action: NormalizedAction,
        at: datetime,
        staff_id: str,
        work_date: date,
        record: Optional[DailyAttendanceRecord],
        intervals: Iterable[BreakInterval],
        display_name: str = "",
    ) -> Transition:
        ledger = BreakLedger.for_key(staff_id, work_date, intervals)
        current = record or DailyAttendanceRecord(work_date=work_date, staff_id=staff_id, display_name=display_name)

        strategy = self._factory.for_action(action)
        decision = strategy.decide(at=at, record=current, ledger=ledger)
        if not decision.accepted:
            return decision

        after = self._intervals_after(ledger, decision)
        refreshed = self._aggregator.refresh(replace(decision.record, present=True), after)
        if display_name and not refreshed.display_name:
            refreshed = replace(refreshed, display_name=display_name)
        return replace(decision, record=refreshed)

    @staticmethod
    def _intervals_after(ledger: BreakLedger, decision: Transition) -> list[BreakInterval]:
        intervals = list(ledger.intervals)
        if decision.closed is not None:
            intervals = [
                decision.closed if i.start == decision.closed.start and i.is_open else i
                for i in intervals
            ]
        if decision.opened is not None:
            intervals.append(decision.opened)
        return intervals
