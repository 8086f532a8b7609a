"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_API_BASE_URL = "http://localhost:5064/api"
DEFAULT_API_TIMEOUT = 10
DEFAULT_CACHE_TTL_SECONDS = 30
DEFAULT_PAGE_SIZE = 10
DEFAULT_SESSION_DAYS = 7
DEFAULT_LICENSE_ALERT_DAYS = 30
DEFAULT_RECENT_NOTIFICATIONS = 5

MIN_BUS_YEAR = 1990
MAX_BUS_CAPACITY = 100
MIN_PASSWORD_LENGTH = 6
MIN_PHONE_DIGITS = 10
