"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TIMEZONE = "America/Bogota"
DEFAULT_TIMEZONE_FALLBACK_OFFSET = "-05:00"

# Night band used for overtime split and ordinary premium: [19:00, 06:00).
NIGHT_START = time(19, 0)
NIGHT_END = time(6, 0)

MINUTES_PER_DAY = 24 * 60

# How far past the scheduled exit an overnight shift keeps claiming punches.
OVERNIGHT_SPILL_MINUTES = 240

DEFAULT_TOP_LATECOMERS = 10

# Schedule-level default when neither the day nor the schedule says otherwise.
DEFAULT_COMPENSATION_ALLOWED = True
