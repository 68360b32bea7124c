import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timetrack_db"),
}

BREAK_TYPES = [t.strip() for t in os.getenv("BREAK_TYPES", "Salah,Meeting,Lunch,Breakfast,Break").split(",") if t.strip()]

TICK_SECONDS = float(os.getenv("TICK_SECONDS", "1"))
STRICT_TIMER = bool(int(os.getenv("STRICT_TIMER", "0")))
LOCATION_PLACEHOLDER = os.getenv("LOCATION_PLACEHOLDER", "Location not available")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
