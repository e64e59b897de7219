"""Constants and defaults.

Note: table names and column layouts are shared by every store backend.
"""

DEFAULT_TIMEZONE = "Asia/Ho_Chi_Minh"

BREAKS_TABLE = "breaks"
ERRORS_TABLE = "errors"
EVENTS_TABLE = "events"
STAFF_TABLE = "staff"
DAILY_TABLE_PREFIX = "attendance"

BREAK_COLUMNS = ("date", "staff_id", "start", "end", "minutes", "status")
DAILY_COLUMNS = ("date", "staff_id", "display_name", "status", "first_in", "last_out", "break_total", "net_total")
ERROR_COLUMNS = ("timestamp", "staff_id", "message")
EVENT_COLUMNS = ("timestamp", "staff_id", "display_name", "raw_action", "action")
STAFF_COLUMNS = ("staff_id", "display_name", "phone")

PRESENT_LABEL = "Present"

DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
TIME_OF_DAY_FORMAT = "%H:%M:%S"


def daily_table_name(year: int, month: int) -> str:
    """One daily-attendance table per reporting month."""
    return f"{DAILY_TABLE_PREFIX}_{year:04d}_{month:02d}"
