"""
Backward stay reconciliation.

When a stop is anchored to a fixed arrival, the stop right before it should
leave just early enough to cover the anchor's travel lead time. This module
computes the predecessor's new stay duration from the schedule simulated
before the edit.

Key design decisions:
- Single hop: only the immediate predecessor is adjusted, nothing further
  back and nothing after the anchor
- Infeasible adjustments (non-positive stay) are reported, never applied
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..constants import DURATION_PRECISION
from ..timeline_math import combine_date_time, format_time, hours_between, round_hours
from ..types import Schedule, Stop, Trip
from .timeline_simulator import find_scheduled, sort_stops

logger = logging.getLogger(__name__)


@dataclass
class StayAdjustment:
    """Result of reconciling an anchor with its predecessor."""

    predecessor_id: str
    predecessor_arrival: datetime
    required_departure: datetime  # Anchor time minus the anchor's travel lead
    duration_hours: float  # Rounded new stay; <= 0 when infeasible
    feasible: bool

    @property
    def warning(self) -> str | None:
        """User-facing message for an infeasible anchor, None otherwise."""
        if self.feasible:
            return None
        return (
            f"Cannot arrive at the fixed time: the previous stop arrives at "
            f"{format_time(self.predecessor_arrival.time())} and would need to leave by "
            f"{format_time(self.required_departure.time())} on "
            f"{self.required_departure.date().isoformat()}. "
            f"Its stay duration was left unchanged."
        )


def find_predecessor(stops: list[Stop], candidate: Stop) -> Stop | None:
    """
    Stop that precedes the candidate before the edit is applied.

    Editing an existing stop: the stop immediately before it in the current
    order. Adding a new stop: the current last stop.
    """
    ordered = sort_stops(stops)
    for index, stop in enumerate(ordered):
        if stop.id == candidate.id:
            return ordered[index - 1] if index > 0 else None
    return ordered[-1] if ordered else None


def reconcile(
    trip: Trip,
    stops: list[Stop],
    schedule_snapshot: Schedule,
    candidate: Stop,
    predecessor: Stop | None,
) -> StayAdjustment | None:
    """
    Compute the predecessor stay that lets the candidate hit its anchor.

    Args:
        trip: Trip being edited
        stops: Stop sequence before the edit. Not read here: the predecessor
            is already resolved from it, and the parameter mirrors the
            find_predecessor call the caller makes
        schedule_snapshot: simulate() output computed before the edit
        candidate: Stop being saved
        predecessor: Result of find_predecessor(stops, candidate)

    Returns:
        StayAdjustment (check `feasible`), or None when no reconciliation
        applies: the candidate is not anchored, there is no predecessor, or
        the predecessor is not in the snapshot
    """
    if not candidate.has_anchor or predecessor is None:
        return None

    scheduled = find_scheduled(schedule_snapshot, predecessor.id)
    if scheduled is None:
        logger.debug(
            "Trip %s: predecessor %s of %s is not scheduled, skipping reconciliation",
            trip.id,
            predecessor.id,
            candidate.id,
        )
        return None

    target_arrival = combine_date_time(candidate.fixed_date, candidate.fixed_time)
    required_departure = target_arrival - timedelta(minutes=candidate.travel_lead_minutes)
    new_hours = round_hours(
        hours_between(scheduled.arrival, required_departure), DURATION_PRECISION
    )

    adjustment = StayAdjustment(
        predecessor_id=predecessor.id,
        predecessor_arrival=scheduled.arrival,
        required_departure=required_departure,
        duration_hours=new_hours,
        feasible=new_hours > 0,
    )

    if adjustment.feasible:
        logger.info(
            "Trip %s: stay of %s set to %.2fh to reach %s",
            trip.id,
            predecessor.id,
            new_hours,
            candidate.id,
        )
    else:
        logger.warning(
            "Trip %s: anchor %s at %s is infeasible after %s (needs %.2fh stay)",
            trip.id,
            candidate.id,
            target_arrival.isoformat(),
            predecessor.id,
            new_hours,
        )

    return adjustment
