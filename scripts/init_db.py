from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.sms_attendance.sms_attendance.container import build_container
from src.sms_attendance.sms_attendance.database.bootstrap import ensure_database_exists, init_tables, list_tables


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_database_exists(db_config)
    container = build_container(db_config=db_config, backend="mysql", timezone=settings.TIMEZONE)
    init_tables(container.store)
    tables = list_tables(db_config)
    print(
        "OK: ensured tables -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
