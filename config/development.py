import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5064/api")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

CACHE_TTL_SECONDS = float(os.getenv("CACHE_TTL_SECONDS", "30"))
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
