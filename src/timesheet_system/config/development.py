import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timesheet_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "mysql" or "memory"
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
SYNC_ROSTER_ON_STARTUP = bool(int(os.getenv("SYNC_ROSTER_ON_STARTUP", "1")))

ACTIVITY_LOG_LIMIT = int(os.getenv("ACTIVITY_LOG_LIMIT", "50"))

# Roster policy. ROSTER_FILE (JSON) overrides the values below when set.
ROSTER_FILE = os.getenv("ROSTER_FILE", "")
ROSTER_CANONICAL_NAMES = [
    "Anitha", "Asha", "Aswini", "Balaji", "Dhivya", "Dharma",
    "Jegan", "Kamal", "Kumaran", "Loki", "Mani", "Nandhini", "Sakthi",
    "Sandhiya", "Sangeetha", "Vivek", "Yogesh",
]
ROSTER_NAME_ALIASES = {
    "Dhivyaharini": "Dhivya",
    "Lokesh": "Loki",
}
ROSTER_DENIED_NAMES: list[str] = []
ROSTER_PRUNE_UNLISTED = bool(int(os.getenv("ROSTER_PRUNE_UNLISTED", "1")))

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
