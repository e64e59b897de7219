from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .core.constants import DEFAULT_TIMEZONE
from .database.bootstrap import ensure_database_exists, init_tables

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings_module: str | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    db_config = getattr(settings, "DB_CONFIG", {})
    backend = getattr(settings, "STORE_BACKEND", "mysql")
    timezone = getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)

    logger.info("settings=%s backend=%s timezone=%s", settings_module, backend, timezone)

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        ensure_database_exists(db_config)

    container = build_container(db_config=db_config, backend=backend, timezone=timezone)
    if backend == "memory" or bool(getattr(settings, "AUTO_INIT_DB", False)):
        init_tables(container.store)

    app.extensions["sms_attendance"] = container
    register_attendance(app, container)

    return app
