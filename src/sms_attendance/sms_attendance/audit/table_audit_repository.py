from __future__ import annotations

from datetime import tzinfo
from typing import Sequence

from ..common.datetime_utils import coerce_timestamp, format_timestamp
from ..core.constants import ERROR_COLUMNS, ERRORS_TABLE, EVENT_COLUMNS, EVENTS_TABLE
from ..database.table_store import TableBackedRepository, TableStore
from .model import ErrorEntry, EventLogEntry
from .repository import AuditRepository


class TableAuditRepository(TableBackedRepository, AuditRepository):
    """Append-only error and event tables."""

    def __init__(self, store: TableStore, *, tz: tzinfo):
        super().__init__(store)
        self._tz = tz

    def append_error(self, entry: ErrorEntry) -> None:
        table = self._table(ERRORS_TABLE, ERROR_COLUMNS)
        self._store.append_row(
            table,
            {
                "timestamp": format_timestamp(entry.timestamp, self._tz),
                "staff_id": entry.staff_id,
                "message": entry.message,
            },
        )

    def append_event(self, entry: EventLogEntry) -> None:
        table = self._table(EVENTS_TABLE, EVENT_COLUMNS)
        self._store.append_row(
            table,
            {
                "timestamp": format_timestamp(entry.timestamp, self._tz),
                "staff_id": entry.staff_id,
                "display_name": entry.display_name,
                "raw_action": entry.raw_action,
                "action": entry.action,
            },
        )

    def list_errors(self, *, staff_id: str | None = None) -> Sequence[ErrorEntry]:
        table = self._table(ERRORS_TABLE, ERROR_COLUMNS)
        rows = self._store.find_rows(table, lambda r: staff_id is None or r.get("staff_id") == staff_id)
        return [
            ErrorEntry(
                timestamp=coerce_timestamp(r.get("timestamp"), self._tz),
                staff_id=r.get("staff_id"),
                message=r.get("message"),
            )
            for r in rows
        ]
