import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "sms_attendance"),
    "lock_timeout": int(os.getenv("DB_LOCK_TIMEOUT", "10")),
}

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

TIMEZONE = os.getenv("TIMEZONE", "Asia/Ho_Chi_Minh")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
