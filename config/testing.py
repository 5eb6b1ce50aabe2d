from config.config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

STORAGE = "memory"
LOG_LEVEL = "WARNING"
ORG_TIMEZONE = "UTC"
LATE_CUTOFF = "09:15"

AUTO_INIT_DB = False

MEMORY_EMPLOYEES = [
    {"id": 1, "name": "Admin", "email": "admin@example.com", "role": "admin"},
    {"id": 2, "name": "Jane Doe", "email": "jane@example.com"},
]
