"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

LATE_CUTOFF_HOUR = 9
DEFAULT_RECENT_LIMIT = 7
DEFAULT_SESSION_DAYS = 7

DATE_FORMAT = "%Y-%m-%d"
CSV_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

REPORT_HEADERS = (
    "Date",
    "Employee Name",
    "Employee ID",
    "Department",
    "Check In",
    "Check Out",
    "Total Hours",
    "Status",
)
