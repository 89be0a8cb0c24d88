import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "labor_time_db"),
}

# Business calendar zone; the fixed offset is used when the zone database lacks it
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "America/Bogota")
APP_TIMEZONE_FALLBACK_OFFSET = os.getenv("APP_TIMEZONE_FALLBACK_OFFSET", "-05:00")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

TOP_LATECOMERS = int(os.getenv("TOP_LATECOMERS", "10"))
INFER_ABSENCE_ON_LABORABLE_HOLIDAY = bool(int(os.getenv("INFER_ABSENCE_ON_LABORABLE_HOLIDAY", "0")))
