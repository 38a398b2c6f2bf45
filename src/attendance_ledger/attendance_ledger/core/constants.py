"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOP_PERFORMERS_LIMIT = 10
DEFAULT_RECENT_SESSIONS_LIMIT = 6

UNKNOWN_SESSION_NAME = "Unknown Session"
UNKNOWN_SESSION_TYPE = "Unknown"
UNKNOWN_DATE_LABEL = "Unknown Date"
