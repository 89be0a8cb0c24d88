from __future__ import annotations

from ...common.datetime_utils import minutes_of_day
from ...core.constants import MINUTES_PER_DAY, NIGHT_END, NIGHT_START
from .base import OvertimeCalculator, OvertimeSplit

_NIGHT_START = minutes_of_day(NIGHT_START)
_NIGHT_END = minutes_of_day(NIGHT_END)


def _span(start: int, end: int) -> int:
    return max(0, end - start)


def overlap_minutes(start: int, end: int, window_start: int, window_end: int) -> int:
    return _span(max(start, window_start), min(end, window_end))


def night_minutes(start: int, end: int) -> int:
    """Minutes of [start, end) inside the night band.

    On the axis the band for day offset k is [k*1440 - 300, k*1440 + 360),
    i.e. 19:00 of the previous day up to 06:00.
    """
    if end <= start:
        return 0
    first_k = (start - _NIGHT_END) // MINUTES_PER_DAY
    last_k = (end + (MINUTES_PER_DAY - _NIGHT_START)) // MINUTES_PER_DAY + 1
    total = 0
    for k in range(first_k, last_k + 1):
        day_start = k * MINUTES_PER_DAY
        total += overlap_minutes(start, end, day_start - (MINUTES_PER_DAY - _NIGHT_START), day_start + _NIGHT_END)
    return total


class NightBandOvertimeCalculator(OvertimeCalculator):
    """Closed-form split of overtime and ordinary premium around 19:00.

    Day shifts are cut at 19:00 only: whatever lies after it is night, and
    the ordinary premium exists only when the scheduled exit is past 19:00.
    Overnight shifts use the full [19:00, 06:00) band so the morning after
    the shift goes back to diurnal time.
    """

    def split(self, *, expected_exit: int, first_entry: int, last_exit: int, overnight: bool = False) -> OvertimeSplit:
        total = _span(expected_exit, last_exit)
        if overnight:
            nocturnal = night_minutes(expected_exit, last_exit)
            diurnal = total - nocturnal
            premium = night_minutes(first_entry, min(last_exit, expected_exit))
        else:
            diurnal = 0 if expected_exit >= _NIGHT_START else _span(expected_exit, min(last_exit, _NIGHT_START))
            nocturnal = 0 if last_exit <= _NIGHT_START else _span(max(expected_exit, _NIGHT_START), last_exit)
            premium = 0
            if expected_exit > _NIGHT_START:
                premium = _span(max(first_entry, _NIGHT_START), min(last_exit, expected_exit))
        return OvertimeSplit(
            total_overtime_minutes=total,
            diurnal_overtime_minutes=diurnal,
            nocturnal_overtime_minutes=nocturnal,
            ordinary_nocturnal_premium_minutes=premium,
        )
