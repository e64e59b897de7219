from __future__ import annotations

import hashlib
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional, Sequence

from ..core.exceptions import StoreError
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, quote_identifier
from .table_store import Row, RowPredicate, TableStore, cell_value

ROW_ID = "row_id"
DEFAULT_LOCK_TIMEOUT = 10
_LOCK_PREFIX = "sms_attendance:"


def _lock_name(key: str) -> str:
    # MySQL caps lock names at 64 characters.
    return _LOCK_PREFIX + hashlib.sha1(key.encode("utf-8")).hexdigest()


class MySQLTableStore(TableStore):
    """Table store backed by MySQL: one SQL table per logical table.

    Every table has an auto-increment ``row_id`` plus one TEXT column per
    header column. Predicates are evaluated in Python over a full scan.

    ``hold`` uses MySQL named locks, so it serializes every worker process
    connected to the same server, not just threads of this one.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, lock_timeout: int = DEFAULT_LOCK_TIMEOUT):
        self._conn_factory = conn_factory
        self._lock_timeout = int(lock_timeout)

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        name = _lock_name(key)
        # Named locks belong to the session, so one connection spans the whole block.
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT GET_LOCK(%s, %s)", (name, self._lock_timeout))
            (acquired,) = cur.fetchone()
            if acquired != 1:
                raise StoreError(f"Timed out after {self._lock_timeout}s waiting for lock on {key!r}")
            try:
                yield
            finally:
                cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                cur.fetchone()

    def ensure_header(self, table: str, columns: Sequence[str]) -> None:
        name = quote_identifier(table)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {name} (
                    {ROW_ID} INT AUTO_INCREMENT PRIMARY KEY
                ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
                """
            )
            cur.execute(
                """
                SELECT COLUMN_NAME AS column_name
                FROM information_schema.COLUMNS
                WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s
                """,
                (table,),
            )
            existing = {r["column_name"] for r in fetchall(cur)}
            for col in columns:
                if col not in existing:
                    cur.execute(f"ALTER TABLE {name} ADD COLUMN {quote_identifier(col)} TEXT NULL")

    def find_row(self, table: str, predicate: RowPredicate) -> Optional[Row]:
        for row in self.find_rows(table):
            if predicate(row):
                return row
        return None

    def find_rows(self, table: str, predicate: Optional[RowPredicate] = None) -> list[Row]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT * FROM {quote_identifier(table)}")
            rows = [
                Row(
                    number=int(r[ROW_ID]),
                    values={k: cell_value(v) for k, v in r.items() if k != ROW_ID},
                )
                for r in fetchall(cur)
            ]
        if predicate is None:
            return rows
        return [r for r in rows if predicate(r)]

    def append_row(self, table: str, values: Mapping[str, Any]) -> int:
        columns = list(values)
        placeholders = ",".join(["%s"] * len(columns))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {quote_identifier(table)}({','.join(quote_identifier(c) for c in columns)}) "
                f"VALUES({placeholders})",
                tuple(cell_value(values[c]) for c in columns),
            )
            return int(cur.lastrowid)

    def update_cell(self, table: str, row: int, column: str, value: Any) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {quote_identifier(table)} SET {quote_identifier(column)}=%s WHERE {ROW_ID}=%s",
                (cell_value(value), int(row)),
            )
