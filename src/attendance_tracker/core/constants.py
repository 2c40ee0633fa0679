"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TOKEN_VALIDITY_DAYS = 30
TOKEN_ALGORITHM = "HS256"

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

EMPLOYEE_ID_PREFIX = "EMP"
EMPLOYEE_SEQUENCE_WIDTH = 3

MIN_PASSWORD_LENGTH = 6
MAX_NOTES_LENGTH = 500

# Sanity window for derived working hours; values outside are logged, not rejected.
MAX_WORKING_HOURS = 24.0

DATE_KEY_FORMAT = "%Y-%m-%d"
