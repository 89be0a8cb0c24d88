import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "labor_time_test"),
}

APP_TIMEZONE = "America/Bogota"
APP_TIMEZONE_FALLBACK_OFFSET = "-05:00"

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

TOP_LATECOMERS = 10
INFER_ABSENCE_ON_LABORABLE_HOLIDAY = False
