from __future__ import annotations

import threading
from typing import Any, ContextManager, Mapping, Optional, Sequence

from ..core.exceptions import StoreError
from .locks import KeyedLocks
from .table_store import Row, RowPredicate, TableStore, cell_value


class InMemoryTableStore(TableStore):
    """Process-local table store (tests, demos, ``STORE_BACKEND=memory``).

    Rows are numbered from 1 in insertion order, like spreadsheet data rows.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._keys = KeyedLocks()
        self._headers: dict[str, list[str]] = {}
        self._rows: dict[str, list[dict[str, str]]] = {}

    def hold(self, key: str) -> ContextManager[None]:
        return self._keys.hold(key)

    def ensure_header(self, table: str, columns: Sequence[str]) -> None:
        with self._lock:
            header = self._headers.setdefault(table, [])
            self._rows.setdefault(table, [])
            for col in columns:
                if col not in header:
                    header.append(col)

    def header(self, table: str) -> list[str]:
        with self._lock:
            return list(self._headers.get(table, []))

    def tables(self) -> list[str]:
        with self._lock:
            return sorted(self._headers)

    def find_row(self, table: str, predicate: RowPredicate) -> Optional[Row]:
        for row in self.find_rows(table):
            if predicate(row):
                return row
        return None

    def find_rows(self, table: str, predicate: Optional[RowPredicate] = None) -> list[Row]:
        with self._lock:
            rows = [Row(number=i + 1, values=dict(v)) for i, v in enumerate(self._rows.get(table, []))]
        if predicate is None:
            return rows
        return [r for r in rows if predicate(r)]

    def append_row(self, table: str, values: Mapping[str, Any]) -> int:
        with self._lock:
            header = self._require_header(table)
            unknown = set(values) - set(header)
            if unknown:
                raise StoreError(f"Unknown columns for {table}: {sorted(unknown)}")
            self._rows[table].append({col: cell_value(values.get(col)) for col in header})
            return len(self._rows[table])

    def update_cell(self, table: str, row: int, column: str, value: Any) -> None:
        with self._lock:
            header = self._require_header(table)
            if column not in header:
                raise StoreError(f"Unknown column for {table}: {column}")
            rows = self._rows[table]
            if row < 1 or row > len(rows):
                raise StoreError(f"Row {row} does not exist in {table}")
            rows[row - 1][column] = cell_value(value)

    def _require_header(self, table: str) -> list[str]:
        header = self._headers.get(table)
        if header is None:
            raise StoreError(f"Table {table} has no header")
        return header
