"""
Test helper functions for itinerary schedule checks.

These functions can be imported by test modules for schedule analysis.
"""

import sys
from datetime import datetime
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from itinerary.types import Schedule, ScheduledStop, Stop


def make_stop(stop_id: str, order: int, **kwargs) -> Stop:
    """Stop with a readable default name."""
    return Stop(id=stop_id, name=kwargs.pop("name", f"Stop {stop_id}"), order=order, **kwargs)


def dt(value: str) -> datetime:
    """Parse "2024-06-01 08:00" into a naive datetime."""
    return datetime.strptime(value, "%Y-%m-%d %H:%M")


def scheduled_by_id(schedule: Schedule) -> dict[str, ScheduledStop]:
    """Map stop id -> ScheduledStop across all days."""
    return {item.stop.id: item for bucket in schedule.values() for item in bucket.items}


def stop_ids_for_day(schedule: Schedule, day: int) -> list[str]:
    """Ids of the stops in a day bucket, in bucket order ([] if no bucket)."""
    bucket = schedule.get(day)
    if bucket is None:
        return []
    return [item.stop.id for item in bucket.items]


def timing(schedule: Schedule, stop_id: str) -> tuple[str, str, int]:
    """(arrival "YYYY-MM-DD HH:MM", departure "YYYY-MM-DD HH:MM", day) for a stop."""
    item = scheduled_by_id(schedule)[stop_id]
    return (
        item.arrival.strftime("%Y-%m-%d %H:%M"),
        item.departure.strftime("%Y-%m-%d %H:%M"),
        item.day,
    )
