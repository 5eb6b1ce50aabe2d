"""Settings shared by every environment; each module below overrides a few."""

import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_leave"),
}

# mysql | memory
STORAGE = os.getenv("STORAGE", "mysql")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Organization policy
ORG_TIMEZONE = os.getenv("ORG_TIMEZONE", "UTC")
LATE_CUTOFF = os.getenv("LATE_CUTOFF", "09:15")
LEAVE_REASON_MIN = int(os.getenv("LEAVE_REASON_MIN", "10"))
LEAVE_REASON_MAX = int(os.getenv("LEAVE_REASON_MAX", "500"))
LEAVE_COMMENTS_MAX = int(os.getenv("LEAVE_COMMENTS_MAX", "500"))
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "200"))

# Directory for STORAGE=memory: [{"id", "name", "email", "role", "is_active"}, ...]
MEMORY_EMPLOYEES = []
