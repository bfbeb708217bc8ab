"""
Constants and shared defaults for cycle-related services.
"""
from lunaflow.models.entry import FlowIntensity

# Hard cap on the number of dates produced when expanding a range
MAX_RANGE_DAYS = 60

# Cycles whose length changed by fewer days than this are regular
REGULARITY_THRESHOLD_DAYS = 3

DEFAULT_FLOW_INTENSITY = FlowIntensity.MEDIUM

DEFAULT_THEME_COLOR = "rose"

# Version stamped on persisted and exported documents
DATA_VERSION = 1

# Number of recent entries shown in the duration history
DURATION_HISTORY_LIMIT = 5

DATE_FORMAT = "%Y-%m-%d"

INVALID_DATE_ORDER_MESSAGE = "End date cannot be before start date."
INVALID_DATE_FORMAT_MESSAGE = "Invalid date format, expected YYYY-MM-DD."
INVALID_INTENSITIES_MESSAGE = "Flow intensities must map dates to intensities."

BACKUP_FILENAME_TEMPLATE = "lunaflow_backup_{date}.json"
