"""
Scheduling components for the itinerary timing engine.

- timeline_simulator: ordered stops to day-bucketed timings
- stay_reconciler: predecessor stay for a newly anchored stop
- anchor_policy: pins the first stop of an empty day
"""

from .anchor_policy import anchor_date_for_day, assign_anchor_if_needed
from .stay_reconciler import StayAdjustment, find_predecessor, reconcile
from .timeline_simulator import (
    Placement,
    TimelineCursor,
    find_scheduled,
    iter_scheduled,
    simulate,
)

__all__ = [
    "simulate",
    "find_scheduled",
    "iter_scheduled",
    "Placement",
    "TimelineCursor",
    "StayAdjustment",
    "find_predecessor",
    "reconcile",
    "anchor_date_for_day",
    "assign_anchor_if_needed",
]
