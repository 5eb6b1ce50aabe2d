"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TIMEZONE = "UTC"
DEFAULT_LATE_CUTOFF = time(9, 15)
DEFAULT_REASON_MIN_LENGTH = 10
DEFAULT_REASON_MAX_LENGTH = 500
DEFAULT_COMMENTS_MAX_LENGTH = 500
DEFAULT_HISTORY_LIMIT = 200
MIN_NAME_LENGTH = 2
