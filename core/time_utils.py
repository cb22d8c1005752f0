"""
Time utilities and Shabbat logic for ShiftCalc application.
Contains time parsing, local timestamp construction and interval helpers.

All timestamps here are naive local wall-clock datetimes. A shift is built
from a calendar date plus two HH:MM strings; crossing midnight is an explicit
one-day increment on the end timestamp.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Tuple

from core.config import config
from core.constants import (
    FRIDAY,
    SATURDAY,
    SHABBAT_FRIDAY_START_HOUR,
    NIGHT_WINDOW_START_HOUR,
    NIGHT_WINDOW_END_HOUR,
)

# Time constants
SECONDS_PER_HOUR = 3600

LOCAL_TZ = config.LOCAL_TZ


# =============================================================================
# Parsing
# =============================================================================

def parse_hhmm(value: str) -> Tuple[int, int]:
    """Return (hours, minutes) integers from 'HH:MM'."""
    h, m = value.split(":")[:2]
    return int(h), int(m)


def parse_date(value: str | date) -> date:
    """Return a date from 'YYYY-MM-DD' or pass a date object through."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def today_local() -> date:
    """Current calendar day in the application's timezone."""
    return datetime.now(LOCAL_TZ).date()


# =============================================================================
# Intervals
# =============================================================================

def local_timestamp(day: date, hhmm: str) -> datetime:
    """Combine a calendar day and an 'HH:MM' string into a naive local timestamp."""
    h, m = parse_hhmm(hhmm)
    return datetime.combine(day, time(h, m))


def shift_interval(day: str | date, start_time: str, end_time: str) -> Tuple[datetime, datetime]:
    """
    Return (start, end) timestamps for a shift.

    An end time earlier than the start time means the shift ends on the
    following calendar day. Equal times give a zero-length shift.
    """
    shift_day = parse_date(day)
    start = local_timestamp(shift_day, start_time)
    end = local_timestamp(shift_day, end_time)
    if end < start:
        end += timedelta(days=1)
    return start, end


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed wall-clock hours from start to end."""
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def overlap_hours(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> float:
    """Calculate overlapping hours between two time ranges."""
    overlap_start = max(a_start, b_start)
    overlap_end = min(a_end, b_end)
    if overlap_end <= overlap_start:
        return 0.0
    return hours_between(overlap_start, overlap_end)


def night_window(start: datetime) -> Tuple[datetime, datetime]:
    """Night window for a shift: 22:00 on its start date until 06:00 the next day."""
    window_start = datetime.combine(start.date(), time(NIGHT_WINDOW_START_HOUR))
    window_end = datetime.combine(start.date() + timedelta(days=1), time(NIGHT_WINDOW_END_HOUR))
    return window_start, window_end


# =============================================================================
# Shabbat detection
# =============================================================================

def is_shabbat_start(start: datetime) -> bool:
    """
    Check whether a shift starting at this instant is a Shabbat shift.

    Fixed clock thresholds: Friday from 18:00 onward, or any time on Saturday.
    Only the start instant is considered; the shift is never split.
    """
    weekday = start.weekday()
    if weekday == SATURDAY:
        return True
    return weekday == FRIDAY and start.hour >= SHABBAT_FRIDAY_START_HOUR
