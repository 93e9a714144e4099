"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

WORK_START_TIME = time(9, 0, 0)
RECENT_HISTORY_LIMIT = 7
BROWSER_LIMIT = 100
TREND_DAYS = 7
MIN_PASSWORD_LENGTH = 6
SESSION_DAYS = 7
MISSING_VALUE = "-"
