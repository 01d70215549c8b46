"""
Stop edits with consistent timing.

Every edit follows the same two-phase protocol:
1. Snapshot: simulate the trip as stored, before the edit
2. Mutate: apply the anchor policy (new stops) and reconcile the
   predecessor's stay (anchored stops), writing through the store
3. Resimulate: derive the full schedule again from the stored stops

The snapshot is never reused after writing, so nothing stale leaks between
recomputations.
"""

import logging
from dataclasses import dataclass, field

from .scheduling.anchor_policy import assign_anchor_if_needed
from .scheduling.stay_reconciler import StayAdjustment, find_predecessor, reconcile
from .scheduling.timeline_simulator import simulate
from .store import StopStore
from .types import Schedule, Stop

logger = logging.getLogger(__name__)


@dataclass
class SaveOutcome:
    """Result of saving a stop."""

    stop: Stop  # As written (possibly promoted to an anchor)
    schedule: Schedule  # Fresh simulation after all writes
    adjustment: StayAdjustment | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def predecessor_updated(self) -> bool:
        return self.adjustment is not None and self.adjustment.feasible


def next_order(stops: list[Stop]) -> int:
    """Order value that appends a stop after all existing ones."""
    if not stops:
        return 0
    return max(stop.order for stop in stops) + 1


def save_stop(
    store: StopStore,
    trip_id: str,
    candidate: Stop,
    view_day: int | None = None,
) -> SaveOutcome:
    """
    Add or edit a stop and recompute the trip schedule.

    Args:
        store: Persistence collaborator
        trip_id: Trip being edited
        candidate: Stop to save; an id not yet in the trip means "add"
        view_day: Day the user is viewing, None for the all-days view

    Returns:
        SaveOutcome with the written stop, any predecessor adjustment,
        user-facing warnings and the recomputed schedule
    """
    trip = store.get_trip(trip_id)
    stops = store.list_stops(trip_id)
    snapshot = simulate(trip, stops)

    is_new = all(stop.id != candidate.id for stop in stops)
    if is_new:
        candidate = assign_anchor_if_needed(trip, snapshot, candidate, view_day)

    adjustment = None
    warnings: list[str] = []
    if candidate.has_anchor:
        predecessor = find_predecessor(stops, candidate)
        adjustment = reconcile(trip, stops, snapshot, candidate, predecessor)
        if adjustment is not None:
            if adjustment.feasible:
                store.update_stop(
                    trip_id,
                    adjustment.predecessor_id,
                    {"duration_hours": adjustment.duration_hours},
                )
            else:
                warnings.append(adjustment.warning)

    saved = store.upsert_stop(trip_id, candidate)
    logger.info("Trip %s: %s stop %s", trip_id, "added" if is_new else "updated", saved.id)

    return SaveOutcome(
        stop=saved,
        schedule=simulate(trip, store.list_stops(trip_id)),
        adjustment=adjustment,
        warnings=warnings,
    )


def delete_stop(store: StopStore, trip_id: str, stop_id: str) -> Schedule:
    """Remove a stop and return the recomputed schedule."""
    store.delete_stop(trip_id, stop_id)
    logger.info("Trip %s: deleted stop %s", trip_id, stop_id)
    return simulate(store.get_trip(trip_id), store.list_stops(trip_id))
