"""
Timeline simulation.

Walks the ordered stops once and turns stay durations, travel lead times and
fixed-time anchors into arrival/departure timestamps grouped by trip day.

The walk is a fold over pure steps:
1. arrival_for: where the cursor lands for this stop (anchor reset or travel)
2. apply_rollover: late non-fixed arrivals move to the next morning
3. place_stop: cutoff check and departure computation
4. add_to_schedule: day bucket accumulation
5. advance: the cursor moves to the stop's departure
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..constants import OVERNIGHT_THRESHOLD_HOUR
from ..timeline_math import (
    combine_date_time,
    day_number,
    format_date,
    format_display_date,
    next_day_at,
)
from ..types import DayBucket, Schedule, ScheduledStop, Stop, Trip

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineCursor:
    """Walk state carried between stops."""

    position: datetime  # Earliest moment the next stop can begin (before travel)
    index: int = 0  # Position of the next stop in the sorted sequence


@dataclass(frozen=True)
class Placement:
    """Computed timing for a single stop."""

    arrival: datetime
    departure: datetime
    day: int
    rolled_over: bool = False


def sort_stops(stops: list[Stop]) -> list[Stop]:
    """Stops in ascending `order` (stable for ties)."""
    return sorted(stops, key=lambda s: s.order)


def initial_cursor(trip: Trip) -> TimelineCursor:
    """Cursor at the trip's first day start."""
    return TimelineCursor(position=combine_date_time(trip.start_date, trip.day_start_time))


def arrival_for(stop: Stop, cursor: TimelineCursor) -> datetime:
    """
    Raw arrival for a stop, before rollover.

    Anchored stops reset the clock to their fixed timestamp, ignoring any
    accumulated travel. Otherwise the stop's travel lead time is added,
    except for the very first stop which starts at the cursor.
    """
    if stop.has_anchor:
        return combine_date_time(stop.fixed_date, stop.fixed_time)
    if cursor.index > 0:
        return cursor.position + timedelta(minutes=stop.travel_lead_minutes)
    return cursor.position


def apply_rollover(
    trip: Trip, stop: Stop, arrival: datetime, day: int
) -> tuple[datetime, int, bool]:
    """
    Move a late non-fixed arrival to the next morning.

    Applies only to non-anchored stops still within the trip duration whose
    arrival hour is at or after OVERNIGHT_THRESHOLD_HOUR. The stop moves to
    the following calendar day at the trip's start time; the day number
    increases by exactly one.

    Returns:
        Tuple of (arrival, day, rolled_over)
    """
    if stop.has_anchor or day > trip.duration_days:
        return arrival, day, False
    if arrival.hour < OVERNIGHT_THRESHOLD_HOUR:
        return arrival, day, False
    return next_day_at(arrival, trip.day_start_time), day + 1, True


def place_stop(trip: Trip, stop: Stop, cursor: TimelineCursor) -> Placement | None:
    """
    Compute timing for one stop.

    Returns:
        Placement, or None when a non-fixed stop falls beyond the trip
        duration (the walk must stop there)
    """
    arrival = arrival_for(stop, cursor)
    day = day_number(trip.start_date, arrival)
    arrival, day, rolled_over = apply_rollover(trip, stop, arrival, day)

    if not stop.has_anchor and day > trip.duration_days:
        return None

    departure = arrival + timedelta(hours=stop.duration_hours)
    return Placement(arrival=arrival, departure=departure, day=day, rolled_over=rolled_over)


def advance(cursor: TimelineCursor, placement: Placement) -> TimelineCursor:
    """Cursor for the stop after `placement`."""
    return TimelineCursor(position=placement.departure, index=cursor.index + 1)


def add_to_schedule(schedule: Schedule, stop: Stop, placement: Placement) -> ScheduledStop:
    """Append a placed stop to its day bucket, creating the bucket on first use."""
    arrival_date = placement.arrival.date()
    display_date = format_display_date(arrival_date)

    bucket = schedule.get(placement.day)
    if bucket is None:
        bucket = DayBucket(
            day=placement.day,
            date=format_date(arrival_date),
            display_date=display_date,
        )
        schedule[placement.day] = bucket

    scheduled = ScheduledStop(
        stop=stop,
        arrival=placement.arrival,
        departure=placement.departure,
        day=placement.day,
        display_date=display_date,
    )
    bucket.items.append(scheduled)
    return scheduled


def simulate(trip: Trip, stops: list[Stop]) -> Schedule:
    """
    Compute the day-bucketed timeline for a trip.

    Args:
        trip: Trip supplying start date, start time and duration
        stops: Stops in any order; they are walked by ascending `order`

    Returns:
        Day number -> DayBucket. Days without stops have no entry, and stops
        after the duration cutoff are absent.

    Raises:
        ValueError: if a trip or anchor date/time string is malformed
    """
    schedule: Schedule = {}
    cursor = initial_cursor(trip)
    ordered = sort_stops(stops)

    for stop in ordered:
        placement = place_stop(trip, stop, cursor)
        if placement is None:
            logger.debug(
                "Trip %s: stop %s passes day %d, %d stop(s) left unscheduled",
                trip.id,
                stop.id,
                trip.duration_days,
                len(ordered) - cursor.index,
            )
            break

        if placement.rolled_over:
            logger.debug("Trip %s: stop %s rolled over to day %d", trip.id, stop.id, placement.day)

        add_to_schedule(schedule, stop, placement)
        cursor = advance(cursor, placement)

    return schedule


def find_scheduled(schedule: Schedule, stop_id: str) -> ScheduledStop | None:
    """Look up a stop's computed timing by id."""
    for bucket in schedule.values():
        for item in bucket.items:
            if item.stop.id == stop_id:
                return item
    return None


def iter_scheduled(schedule: Schedule) -> list[ScheduledStop]:
    """All scheduled stops, bucket by bucket."""
    return [item for bucket in schedule.values() for item in bucket.items]
