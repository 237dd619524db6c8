import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dayflow_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

MAX_NOTIFICATIONS = int(os.getenv("MAX_NOTIFICATIONS", "50"))
NOTIFICATION_STORAGE_KEY = os.getenv("NOTIFICATION_STORAGE_KEY", "dayflow-notifications")
ABSENT_CUTOFF_HOUR = int(os.getenv("ABSENT_CUTOFF_HOUR", "10"))
