from __future__ import annotations

from datetime import date, tzinfo
from typing import Optional, Sequence

from ..common.datetime_utils import (
    coerce_optional_timestamp,
    format_date,
    format_time_of_day,
    hhmm_to_mins,
    mins_to_hhmm,
    parse_iso_date,
)
from ..core.constants import DAILY_COLUMNS, PRESENT_LABEL, daily_table_name
from ..database.table_store import Row, TableBackedRepository, TableStore
from .model import DailyAttendanceRecord
from .repository import DailyAttendanceRepository


class TableDailyAttendanceRepository(TableBackedRepository, DailyAttendanceRepository):
    """Daily records in monthly tables, e.g. ``attendance_2026_10``."""

    def __init__(self, store: TableStore, *, tz: tzinfo):
        super().__init__(store)
        self._tz = tz

    def _month_table(self, work_date: date) -> str:
        return self._table(daily_table_name(work_date.year, work_date.month), DAILY_COLUMNS)

    def _to_record(self, row: Row) -> DailyAttendanceRecord:
        work_date = parse_iso_date(row.get("date"))
        return DailyAttendanceRecord(
            work_date=work_date,
            staff_id=row.get("staff_id"),
            display_name=row.get("display_name"),
            present=row.get("status").strip().lower() == PRESENT_LABEL.lower(),
            first_in=coerce_optional_timestamp(row.get("first_in"), self._tz, on_date=work_date),
            last_out=coerce_optional_timestamp(row.get("last_out"), self._tz, on_date=work_date),
            break_minutes=hhmm_to_mins(row.get("break_total")),
            net_minutes=hhmm_to_mins(row.get("net_total")),
        )

    def _to_values(self, record: DailyAttendanceRecord) -> dict[str, str]:
        return {
            "date": format_date(record.work_date),
            "staff_id": record.staff_id,
            "display_name": record.display_name,
            "status": PRESENT_LABEL if record.present else "",
            "first_in": format_time_of_day(record.first_in, self._tz) if record.first_in else "",
            "last_out": format_time_of_day(record.last_out, self._tz) if record.last_out else "",
            "break_total": mins_to_hhmm(record.break_minutes),
            "net_total": mins_to_hhmm(record.net_minutes),
        }

    def _find(self, staff_id: str, work_date: date) -> Optional[Row]:
        table = self._month_table(work_date)
        key_date = format_date(work_date)
        return self._store.find_row(table, lambda r: r.get("staff_id") == staff_id and r.get("date") == key_date)

    def get_for_staff_and_date(self, staff_id: str, work_date: date) -> Optional[DailyAttendanceRecord]:
        row = self._find(staff_id, work_date)
        return self._to_record(row) if row else None

    def save(self, record: DailyAttendanceRecord) -> None:
        table = self._month_table(record.work_date)
        values = self._to_values(record)
        row = self._find(record.staff_id, record.work_date)
        if row is None:
            self._store.append_row(table, values)
            return
        for column, value in values.items():
            if row.get(column) != value:
                self._store.update_cell(table, row.number, column, value)

    def list_for_date(self, work_date: date) -> Sequence[DailyAttendanceRecord]:
        table = self._month_table(work_date)
        key_date = format_date(work_date)
        rows = self._store.find_rows(table, lambda r: r.get("date") == key_date)
        return [self._to_record(r) for r in rows]
