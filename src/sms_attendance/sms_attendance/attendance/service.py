from __future__ import annotations

import logging
from datetime import date, tzinfo
from typing import Any

from ..actions.normalizer import action_label, normalize
from ..audit.model import ErrorEntry, EventLogEntry
from ..audit.repository import AuditRepository
from ..breaks.repository import BreakRepository
from ..common.datetime_utils import coerce_timestamp, day_key, format_date, format_time_of_day, mins_to_hhmm, now_local
from ..core.constants import PRESENT_LABEL
from ..core.enums import IgnoreReason, NormalizedAction
from ..core.exceptions import StoreError
from ..database.locks import KeyedLocks, KeyLock
from ..staff.phone import mask_phone
from ..staff.repository import StaffDirectory
from .engine import ReconciliationEngine
from .model import DailyAttendanceRecord
from .outcome import Applied, HandlingOutcome, Ignored, Rejected
from .repository import DailyAttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Host-facing entry point: one webhook event in, one outcome out.

    Store failures propagate to the caller; ordering violations and unknown
    actions are returned as outcome values.
    """

    def __init__(
        self,
        attendance: DailyAttendanceRepository,
        breaks: BreakRepository,
        audit: AuditRepository,
        staff: StaffDirectory,
        *,
        tz: tzinfo,
        engine: ReconciliationEngine | None = None,
        locks: KeyLock | None = None,
    ):
        self._attendance = attendance
        self._breaks = breaks
        self._audit = audit
        self._staff = staff
        self._tz = tz
        self._engine = engine or ReconciliationEngine()
        self._locks = locks if locks is not None else KeyedLocks()

    def handle_event(self, raw_identifier: str, raw_action: str, occurred_at: Any = None) -> HandlingOutcome:
        staff = self._staff.resolve(raw_identifier)
        if staff is None:
            logger.info("Dropped event from unregistered identifier %s", mask_phone(raw_identifier))
            return Ignored(IgnoreReason.UNREGISTERED_STAFF)

        at = now_local(self._tz) if occurred_at is None else coerce_timestamp(occurred_at, self._tz)
        at = at.replace(microsecond=0)
        action = normalize(raw_action)

        self._audit.append_event(
            EventLogEntry(
                timestamp=at,
                staff_id=staff.staff_id,
                display_name=staff.display_name,
                raw_action=raw_action or "",
                action=action_label(raw_action),
            )
        )

        if action == NormalizedAction.UNKNOWN:
            logger.debug("Ignored unknown action %r from %s", raw_action, staff.staff_id)
            return Ignored(IgnoreReason.UNKNOWN_ACTION)

        work_date = day_key(at, self._tz)
        with self._locks.hold(f"{staff.staff_id}|{work_date.isoformat()}"):
            # All reads happen before any write for this key.
            record = self._attendance.get_for_staff_and_date(staff.staff_id, work_date)
            intervals = self._breaks.list_for(staff.staff_id, work_date)

            transition = self._engine.apply(
                action=action,
                at=at,
                staff_id=staff.staff_id,
                work_date=work_date,
                record=record,
                intervals=intervals,
                display_name=staff.display_name,
            )

            if transition.rejected:
                error = ErrorEntry(timestamp=at, staff_id=staff.staff_id, message=transition.rejection.value)
                self._audit.append_error(error)
                logger.warning("Rejected %s for %s at %s: %s", action.value, staff.staff_id, at.isoformat(), error.message)
                return Rejected(error)

            if transition.opened is not None:
                self._breaks.create_open(transition.opened)
            if transition.closed is not None:
                closed = self._breaks.close(
                    staff_id=staff.staff_id,
                    work_date=work_date,
                    start=transition.closed.start,
                    end=transition.closed.end,
                    minutes=transition.closed.minutes,
                )
                if not closed:
                    # Totals must follow the stored ledger; leave the daily row untouched.
                    raise StoreError(
                        f"Open break for {staff.staff_id} at {transition.closed.start.isoformat()} vanished before close"
                    )
            self._attendance.save(transition.record)

        logger.info("Applied %s for %s at %s", action.value, staff.staff_id, at.isoformat())
        return Applied(transition.record)

    def get_record(self, staff_id: str, work_date: date) -> DailyAttendanceRecord | None:
        return self._attendance.get_for_staff_and_date(staff_id, work_date)

    def daily_report(self, work_date: date) -> list[dict]:
        rows = sorted(self._attendance.list_for_date(work_date), key=lambda r: r.staff_id)
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: DailyAttendanceRecord) -> dict:
        return {
            "date": format_date(r.work_date),
            "staff_id": r.staff_id,
            "name": r.display_name,
            "status": PRESENT_LABEL if r.present else "-",
            "first_in": format_time_of_day(r.first_in, self._tz) if r.first_in else "-",
            "last_out": format_time_of_day(r.last_out, self._tz) if r.last_out else "-",
            "break_hours": mins_to_hhmm(r.break_minutes),
            "net_hours": mins_to_hhmm(r.net_minutes),
        }

    @staticmethod
    def describe(outcome: HandlingOutcome) -> str:
        """Short text for logs and acknowledgments."""
        if isinstance(outcome, Applied):
            return "applied"
        if isinstance(outcome, Rejected):
            return f"rejected: {outcome.error.message}"
        return f"ignored: {outcome.reason.value.lower()}"
