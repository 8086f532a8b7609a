import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5064/api")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

CACHE_TTL_SECONDS = float(os.getenv("CACHE_TTL_SECONDS", "30"))
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
