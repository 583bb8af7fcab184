"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

# Sentinel description of the first-slot cell that marks a whole day as leave.
FULL_DAY_LEAVE = "FULL_DAY_LEAVE"

DEFAULT_LOG_LIMIT = 50
DEFAULT_EDITED_BY = "System"
DATE_KEY_FORMAT = "%Y-%m-%d"
