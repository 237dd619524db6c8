"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_NOTIFICATIONS = 50
NOTIFICATION_STORAGE_KEY = "dayflow-notifications"
DEFAULT_HISTORY_DAYS = 30
MAX_HISTORY_DAYS = 366
DEFAULT_ABSENT_CUTOFF_HOUR = 10
DUE_SOON_WINDOW_DAYS = 1
RELATIVE_TIME_MAX_DAYS = 7
