from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Sequence

from ..common.datetime_utils import coerce_optional_timestamp, coerce_timestamp, format_date, format_timestamp, parse_iso_date
from ..core.constants import BREAK_COLUMNS, BREAKS_TABLE
from ..core.enums import BreakStatus
from ..database.table_store import Row, TableBackedRepository, TableStore
from .model import BreakInterval
from .repository import BreakRepository


class TableBreakRepository(TableBackedRepository, BreakRepository):
    def __init__(self, store: TableStore, *, tz: tzinfo):
        super().__init__(store)
        self._tz = tz

    def _key_matches(self, row: Row, staff_id: str, work_date: date) -> bool:
        return row.get("staff_id") == staff_id and row.get("date") == format_date(work_date)

    def _to_interval(self, row: Row) -> BreakInterval:
        work_date = parse_iso_date(row.get("date"))
        minutes = row.get("minutes").strip()
        return BreakInterval(
            work_date=work_date,
            staff_id=row.get("staff_id"),
            start=coerce_timestamp(row.get("start"), self._tz, on_date=work_date),
            end=coerce_optional_timestamp(row.get("end"), self._tz, on_date=work_date),
            minutes=int(float(minutes)) if minutes else None,
            status=BreakStatus(row.get("status").strip().upper() or BreakStatus.OPEN.value),
        )

    def list_for(self, staff_id: str, work_date: date) -> Sequence[BreakInterval]:
        table = self._table(BREAKS_TABLE, BREAK_COLUMNS)
        rows = self._store.find_rows(table, lambda r: self._key_matches(r, staff_id, work_date))
        return [self._to_interval(r) for r in rows]

    def create_open(self, interval: BreakInterval) -> None:
        table = self._table(BREAKS_TABLE, BREAK_COLUMNS)
        self._store.append_row(
            table,
            {
                "date": format_date(interval.work_date),
                "staff_id": interval.staff_id,
                "start": format_timestamp(interval.start, self._tz),
                "end": "",
                "minutes": "",
                "status": BreakStatus.OPEN.value,
            },
        )

    def close(self, *, staff_id: str, work_date: date, start: datetime, end: datetime, minutes: int) -> bool:
        table = self._table(BREAKS_TABLE, BREAK_COLUMNS)

        def is_target(row: Row) -> bool:
            if not self._key_matches(row, staff_id, work_date):
                return False
            if row.get("status").strip().upper() != BreakStatus.OPEN.value:
                return False
            return coerce_timestamp(row.get("start"), self._tz, on_date=work_date) == start

        row = self._store.find_row(table, is_target)
        if row is None:
            return False
        self._store.update_cell(table, row.number, "end", format_timestamp(end, self._tz))
        self._store.update_cell(table, row.number, "minutes", int(minutes))
        self._store.update_cell(table, row.number, "status", BreakStatus.CLOSED.value)
        return True
