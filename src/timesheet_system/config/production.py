import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timesheet_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
SYNC_ROSTER_ON_STARTUP = bool(int(os.getenv("SYNC_ROSTER_ON_STARTUP", "0")))

ACTIVITY_LOG_LIMIT = int(os.getenv("ACTIVITY_LOG_LIMIT", "50"))

ROSTER_FILE = os.getenv("ROSTER_FILE", "")
ROSTER_CANONICAL_NAMES: list[str] = []
ROSTER_NAME_ALIASES: dict[str, str] = {}
ROSTER_DENIED_NAMES: list[str] = []
ROSTER_PRUNE_UNLISTED = bool(int(os.getenv("ROSTER_PRUNE_UNLISTED", "0")))

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
