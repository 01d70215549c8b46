"""
Persistence collaborator interface.

The timing engine never writes on its own. Edits flow through a StopStore,
which supplies the trip and its stops and accepts merge updates. The
in-memory implementation backs the command-line tools and tests; a remote
document store would implement the same protocol.
"""

from dataclasses import fields, replace
from typing import Any, Protocol

from .types import Stop, Trip


class RecordNotFoundError(LookupError):
    """Raised when a trip or stop id is not in the store."""


class StopStore(Protocol):
    """Operations the edit flow needs from a store."""

    def get_trip(self, trip_id: str) -> Trip: ...

    def list_stops(self, trip_id: str) -> list[Stop]: ...

    def upsert_stop(self, trip_id: str, stop: Stop) -> Stop: ...

    def update_stop(self, trip_id: str, stop_id: str, changes: dict[str, Any]) -> Stop: ...

    def delete_stop(self, trip_id: str, stop_id: str) -> None: ...

    def update_trip(self, trip_id: str, changes: dict[str, Any]) -> Trip: ...


def _merge(record, changes: dict[str, Any]):
    """Copy of a dataclass record with `changes` applied; unknown fields are rejected."""
    known = {f.name for f in fields(record)}
    unknown = set(changes) - known
    if unknown:
        raise ValueError(f"Unknown field(s) for {type(record).__name__}: {sorted(unknown)}")
    return replace(record, **changes)


class InMemoryStopStore:
    """Dict-backed StopStore. Last write wins."""

    def __init__(self) -> None:
        self._trips: dict[str, Trip] = {}
        self._stops: dict[str, dict[str, Stop]] = {}

    def add_trip(self, trip: Trip, stops: list[Stop] | None = None) -> None:
        """Seed a trip and (optionally) its stops."""
        self._trips[trip.id] = trip
        self._stops[trip.id] = {stop.id: stop for stop in stops or []}

    def get_trip(self, trip_id: str) -> Trip:
        try:
            return self._trips[trip_id]
        except KeyError:
            raise RecordNotFoundError(f"Unknown trip: {trip_id}") from None

    def list_stops(self, trip_id: str) -> list[Stop]:
        """Stops ordered by `order`, like an ordered document query."""
        self.get_trip(trip_id)
        return sorted(self._stops[trip_id].values(), key=lambda s: s.order)

    def get_stop(self, trip_id: str, stop_id: str) -> Stop:
        self.get_trip(trip_id)
        try:
            return self._stops[trip_id][stop_id]
        except KeyError:
            raise RecordNotFoundError(f"Unknown stop {stop_id} in trip {trip_id}") from None

    def upsert_stop(self, trip_id: str, stop: Stop) -> Stop:
        self.get_trip(trip_id)
        self._stops[trip_id][stop.id] = stop
        return stop

    def update_stop(self, trip_id: str, stop_id: str, changes: dict[str, Any]) -> Stop:
        updated = _merge(self.get_stop(trip_id, stop_id), changes)
        self._stops[trip_id][stop_id] = updated
        return updated

    def delete_stop(self, trip_id: str, stop_id: str) -> None:
        self.get_stop(trip_id, stop_id)
        del self._stops[trip_id][stop_id]

    def update_trip(self, trip_id: str, changes: dict[str, Any]) -> Trip:
        updated = _merge(self.get_trip(trip_id), changes)
        self._trips[trip_id] = updated
        return updated
