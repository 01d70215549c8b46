"""
Anchor assignment for the first stop added to an empty day.

A non-fixed stop added from a day view would otherwise inherit wherever the
cursor happens to be, which may not be the viewed day at all (or may fall
past the cutoff). Promoting it to an anchor pins it to that day.
"""

import logging
from dataclasses import replace

from ..constants import DEFAULT_ANCHOR_TIME
from ..timeline_math import add_days
from ..types import Schedule, Stop, Trip

logger = logging.getLogger(__name__)


def anchor_date_for_day(trip: Trip, day: int) -> str:
    """Calendar date ("YYYY-MM-DD") of a 1-based trip day."""
    return add_days(trip.start_date, day - 1)


def assign_anchor_if_needed(
    trip: Trip,
    schedule_snapshot: Schedule,
    candidate: Stop,
    target_day: int | None,
    is_new: bool = True,
) -> Stop:
    """
    Promote a new stop to a fixed-time anchor when its day is empty.

    Args:
        trip: Trip being edited
        schedule_snapshot: simulate() output computed before the edit
        candidate: Stop being saved
        target_day: Day the user is viewing; None for the all-days view
        is_new: False when editing an existing stop

    Returns:
        A promoted copy of the candidate, or the candidate itself
    """
    if not is_new or candidate.is_fixed_time or target_day is None:
        return candidate

    bucket = schedule_snapshot.get(target_day)
    if bucket is not None and bucket.items:
        return candidate

    fixed_date = anchor_date_for_day(trip, target_day)
    logger.info(
        "Trip %s: day %d is empty, anchoring %s at %s %s",
        trip.id,
        target_day,
        candidate.id,
        fixed_date,
        DEFAULT_ANCHOR_TIME,
    )
    return replace(
        candidate,
        is_fixed_time=True,
        fixed_date=fixed_date,
        fixed_time=DEFAULT_ANCHOR_TIME,
    )
