import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timetrack_test"),
}

BREAK_TYPES = ["Salah", "Meeting", "Lunch", "Breakfast", "Break"]

TICK_SECONDS = 1.0
STRICT_TIMER = True
LOCATION_PLACEHOLDER = "Location not available"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
