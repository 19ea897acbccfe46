"""Application constants."""

from datetime import timedelta

# Reminder windows, relative to the scan's "now".
# Due soon: now + 24h < due_date < now + 48h
# Overdue:  now - 24h < due_date < now
DUE_SOON_WINDOW_START = timedelta(hours=24)
DUE_SOON_WINDOW_END = timedelta(hours=48)
OVERDUE_WINDOW = timedelta(hours=24)

# Notification listing
DEFAULT_NOTIFICATION_LIMIT = 20
MAX_NOTIFICATION_LIMIT = 100

# Placeholder actor name when the user row is gone
UNKNOWN_ACTOR_NAME = "Someone"
