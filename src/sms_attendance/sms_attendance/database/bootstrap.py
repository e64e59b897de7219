from __future__ import annotations

from dataclasses import dataclass

import mysql.connector

from ..core.constants import (
    BREAK_COLUMNS,
    BREAKS_TABLE,
    ERROR_COLUMNS,
    ERRORS_TABLE,
    EVENT_COLUMNS,
    EVENTS_TABLE,
    STAFF_COLUMNS,
    STAFF_TABLE,
)
from .table_store import TableStore

FIXED_TABLES = {
    BREAKS_TABLE: BREAK_COLUMNS,
    ERRORS_TABLE: ERROR_COLUMNS,
    EVENTS_TABLE: EVENT_COLUMNS,
    STAFF_TABLE: STAFF_COLUMNS,
}


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "sms_attendance")),
    )


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def init_tables(store: TableStore) -> list[str]:
    """Create the fixed tables (monthly attendance tables are created on demand)."""
    for table, columns in FIXED_TABLES.items():
        store.ensure_header(table, columns)
    return list(FIXED_TABLES)


def list_tables(db_config: dict) -> list[str]:
    target = _as_target(db_config)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        database=target.database,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
