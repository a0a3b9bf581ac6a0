"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_REASON = "Personal"
DEFAULT_REJECTION_REMARKS = "No remarks provided"
DEFAULT_LIST_LIMIT = 500
