"""
Clock and calendar arithmetic for itinerary timing.

All timestamps are naive local datetimes; the engine never converts between
time zones except to find "now" for the trip.
"""

from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

import pytz


def parse_time(time_str: str) -> time:
    """Parse "HH:MM" string to time object."""
    parts = time_str.split(":")
    return time(int(parts[0]), int(parts[1]))


def format_time(t: time) -> str:
    """Format time as "HH:MM" (24-hour format for data fields)."""
    return f"{t.hour:02d}:{t.minute:02d}"


def time_to_minutes(t: time) -> int:
    """Convert time to minutes since midnight."""
    return t.hour * 60 + t.minute


def parse_date(date_str: str) -> date:
    """Parse "YYYY-MM-DD" string to date object."""
    return date.fromisoformat(date_str)


def format_date(d: date) -> str:
    """Format date as "YYYY-MM-DD" (used as the day bucket key)."""
    return d.isoformat()


def format_display_date(d: date) -> str:
    """Format date for people, e.g. "Sat, Jun 1"."""
    return f"{d:%a}, {d:%b} {d.day}"


def combine_date_time(date_str: str, time_str: str) -> datetime:
    """
    Build a timestamp from separate date and time-of-day strings.

    Args:
        date_str: "YYYY-MM-DD"
        time_str: "HH:MM"

    Returns:
        Naive datetime at that local date and time

    Raises:
        ValueError: if either string is malformed
    """
    return datetime.combine(parse_date(date_str), parse_time(time_str))


def add_days(date_str: str, days: int) -> str:
    """Shift a "YYYY-MM-DD" date by whole days."""
    return format_date(parse_date(date_str) + timedelta(days=days))


def day_number(start_date: str, moment: datetime) -> int:
    """
    1-based trip day for a timestamp.

    Counts calendar days from the trip start date to the timestamp's date,
    so the start date itself is day 1. Dates before the start give 0 or less.
    """
    return (moment.date() - parse_date(start_date)).days + 1


def next_day_at(moment: datetime, time_str: str) -> datetime:
    """The calendar day after `moment`, at the given "HH:MM"."""
    return datetime.combine(moment.date() + timedelta(days=1), parse_time(time_str))


def hours_between(start: datetime, end: datetime) -> float:
    """Signed hours from start to end."""
    return (end - start).total_seconds() / 3600


def round_hours(hours: float, places: int) -> float:
    """Round hours half-up (0.125 -> 0.13), not half-to-even like round()."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(hours)).quantize(quantum, rounding=ROUND_HALF_UP))


def get_current_datetime_in_tz(tz_name: str) -> datetime:
    """
    Get current datetime in the specified timezone.

    Args:
        tz_name: IANA timezone name (e.g., "Asia/Taipei")

    Returns:
        Current datetime in the specified timezone (naive, for local comparisons)
    """
    tz = pytz.timezone(tz_name)
    now_utc = datetime.now(pytz.UTC)
    now_local = now_utc.astimezone(tz)
    return now_local.replace(tzinfo=None)


def current_trip_day(
    start_date: str,
    duration_days: int,
    tz_name: str | None = None,
    current_datetime: datetime | None = None,
) -> int | None:
    """
    Day number of "today" within a trip.

    Args:
        start_date: Trip start date "YYYY-MM-DD"
        duration_days: Trip length in days
        tz_name: Trip timezone; UTC when None
        current_datetime: Local "now" (defaults to the clock in tz_name)

    Returns:
        1..duration_days while the trip is under way, None before or after it
    """
    if current_datetime is None:
        current_datetime = get_current_datetime_in_tz(tz_name or "UTC")

    day = day_number(start_date, current_datetime)
    if 1 <= day <= duration_days:
        return day
    return None
