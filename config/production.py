import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dayflow_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

MAX_NOTIFICATIONS = int(os.getenv("MAX_NOTIFICATIONS", "50"))
NOTIFICATION_STORAGE_KEY = os.getenv("NOTIFICATION_STORAGE_KEY", "dayflow-notifications")
ABSENT_CUTOFF_HOUR = int(os.getenv("ABSENT_CUTOFF_HOUR", "10"))
