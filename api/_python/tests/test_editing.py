"""
Tests for the edit protocol (snapshot, mutate, resimulate).

Covers the end-to-end scenarios: reconciling a predecessor, warning on an
infeasible anchor, and anchoring the first stop of an empty day.
"""

from dataclasses import replace

import pytest

from helpers import make_stop, stop_ids_for_day, timing
from itinerary.editing import delete_stop, next_order, save_stop
from itinerary.store import InMemoryStopStore, RecordNotFoundError


class TestNextOrder:
    def test_empty(self):
        assert next_order([]) == 0

    def test_after_highest(self):
        assert next_order([make_stop("A", 4), make_stop("B", 2)]) == 5


class TestSaveStop:
    """Adding and editing stops."""

    def test_add_plain_stop(self, store):
        outcome = save_stop(store, "trip-1", make_stop("C", 2, duration_hours=1))

        assert outcome.adjustment is None
        assert outcome.warnings == []
        assert stop_ids_for_day(outcome.schedule, 1) == ["A", "B", "C"]
        assert timing(outcome.schedule, "C")[0] == "2024-06-01 12:00"

    def test_anchor_edit_shortens_predecessor(self, store):
        """B fixed at 09:00 with 15 min travel: A's stay becomes 0.75h."""
        edited = replace(
            store.get_stop("trip-1", "B"),
            is_fixed_time=True,
            fixed_date="2024-06-01",
            fixed_time="09:00",
            travel_minutes=15,
        )

        outcome = save_stop(store, "trip-1", edited)

        assert outcome.predecessor_updated
        assert store.get_stop("trip-1", "A").duration_hours == 0.75
        assert timing(outcome.schedule, "A") == ("2024-06-01 08:00", "2024-06-01 08:45", 1)
        assert timing(outcome.schedule, "B")[0] == "2024-06-01 09:00"

    def test_predecessor_update_is_a_merge(self, store):
        store.update_stop("trip-1", "A", {"notes": "buy tickets"})
        edited = replace(
            store.get_stop("trip-1", "B"),
            is_fixed_time=True,
            fixed_date="2024-06-01",
            fixed_time="11:00",
        )

        save_stop(store, "trip-1", edited)

        a = store.get_stop("trip-1", "A")
        assert a.duration_hours == 2.5
        assert a.notes == "buy tickets"

    def test_infeasible_anchor_warns_and_still_saves(self, store):
        """B fixed at 08:05 with 30 min travel: A untouched, B saved, warning returned."""
        edited = replace(
            store.get_stop("trip-1", "B"),
            is_fixed_time=True,
            fixed_date="2024-06-01",
            fixed_time="08:05",
            travel_minutes=30,
        )

        outcome = save_stop(store, "trip-1", edited)

        assert not outcome.predecessor_updated
        assert len(outcome.warnings) == 1
        assert store.get_stop("trip-1", "A").duration_hours == 1.0
        assert store.get_stop("trip-1", "B").fixed_time == "08:05"
        assert timing(outcome.schedule, "B")[0] == "2024-06-01 08:05"

    def test_anchor_adjusts_only_its_predecessor(self, one_day_trip):
        """Anchoring C touches B alone: nothing before B, nothing after C."""
        store = InMemoryStopStore()
        store.add_trip(
            one_day_trip,
            [
                make_stop("A", 0, duration_hours=1),
                make_stop("B", 1, duration_hours=2),
                make_stop("C", 2, duration_hours=1),
                make_stop("D", 3, duration_hours=2),
            ],
        )
        edited = replace(
            store.get_stop("trip-1", "C"),
            is_fixed_time=True,
            fixed_date="2024-06-01",
            fixed_time="13:00",
        )

        outcome = save_stop(store, "trip-1", edited)

        durations = [s.duration_hours for s in store.list_stops("trip-1")]
        assert durations == [1, 3.0, 1, 2]
        assert outcome.adjustment.predecessor_id == "B"
        assert timing(outcome.schedule, "D")[0] == "2024-06-01 14:30"

    def test_new_stop_on_empty_day_is_anchored(self, three_day_trip, basic_stops):
        """Adding to an empty day 3 pins the stop to 2024-06-03 08:00."""
        store = InMemoryStopStore()
        store.add_trip(three_day_trip, basic_stops)

        outcome = save_stop(store, "trip-3", make_stop("C", 2), view_day=3)

        assert outcome.stop.has_anchor
        assert outcome.stop.fixed_date == "2024-06-03"
        assert stop_ids_for_day(outcome.schedule, 3) == ["C"]
        assert timing(outcome.schedule, "C")[0] == "2024-06-03 08:00"
        # The promoted anchor reconciles against the last stop as any anchor does
        assert outcome.adjustment.predecessor_id == "B"
        assert store.get_stop("trip-3", "B").duration_hours == 46.0

    def test_new_stop_on_busy_day_is_not_anchored(self, store):
        outcome = save_stop(store, "trip-1", make_stop("C", 2), view_day=1)
        assert not outcome.stop.is_fixed_time

    def test_editing_never_promotes(self, three_day_trip, basic_stops):
        store = InMemoryStopStore()
        store.add_trip(three_day_trip, basic_stops)
        edited = replace(basic_stops[1], name="Night market")

        outcome = save_stop(store, "trip-3", edited, view_day=3)

        assert not outcome.stop.is_fixed_time
        assert outcome.adjustment is None

    def test_first_stop_anchor_has_no_reconciliation(self, store):
        edited = replace(
            store.get_stop("trip-1", "A"),
            is_fixed_time=True,
            fixed_date="2024-06-01",
            fixed_time="10:00",
        )

        outcome = save_stop(store, "trip-1", edited)

        assert outcome.adjustment is None
        assert timing(outcome.schedule, "B")[0] == "2024-06-01 11:30"

    def test_unknown_trip(self, store):
        with pytest.raises(RecordNotFoundError):
            save_stop(store, "missing", make_stop("C", 2))


class TestDeleteStop:
    def test_resimulates(self, store):
        schedule = delete_stop(store, "trip-1", "A")

        assert stop_ids_for_day(schedule, 1) == ["B"]
        assert timing(schedule, "B")[0] == "2024-06-01 08:00"

    def test_unknown_stop(self, store):
        with pytest.raises(RecordNotFoundError):
            delete_stop(store, "trip-1", "Z")
