"""
Itinerary Timing Engine

Turns an ordered list of visit-stops into a day-by-day timeline and keeps
timing consistent when fixed-time stops are added or edited.

Main entry points: simulate (schedule) and save_stop (edit protocol)
"""

from .editing import SaveOutcome, delete_stop, next_order, save_stop
from .scheduling import (
    StayAdjustment,
    assign_anchor_if_needed,
    find_predecessor,
    find_scheduled,
    reconcile,
    simulate,
)
from .store import InMemoryStopStore, RecordNotFoundError, StopStore
from .types import DayBucket, Schedule, ScheduledStop, Stop, TransportMode, Trip

__all__ = [
    # Types
    "Trip",
    "Stop",
    "TransportMode",
    "ScheduledStop",
    "DayBucket",
    "Schedule",
    # Engine
    "simulate",
    "find_scheduled",
    "find_predecessor",
    "reconcile",
    "StayAdjustment",
    "assign_anchor_if_needed",
    # Editing
    "save_stop",
    "delete_stop",
    "next_order",
    "SaveOutcome",
    # Persistence
    "StopStore",
    "InMemoryStopStore",
    "RecordNotFoundError",
]
