import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timesheet_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")

AUTO_INIT_DB = False
SYNC_ROSTER_ON_STARTUP = False

ACTIVITY_LOG_LIMIT = 50

ROSTER_FILE = ""
ROSTER_CANONICAL_NAMES = ["Anitha", "Balaji"]
ROSTER_NAME_ALIASES = {"Bala": "Balaji"}
ROSTER_DENIED_NAMES: list[str] = []
ROSTER_PRUNE_UNLISTED = True

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"
