SECRET_KEY = "test-secret"

API_BASE_URL = "http://backend.test/api"
API_TIMEOUT = 1

# Tests assert on backend calls; never serve them from cache across requests
CACHE_TTL_SECONDS = 0
PAGE_SIZE = 10

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
