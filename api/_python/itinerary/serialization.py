"""
JSON conversion for trips, stops and schedules.

Field names follow the stored document shape (camelCase), so records can be
passed straight through from the document store and to the UI.
"""

from typing import get_args

from .constants import DEFAULT_TRANSPORT_MODE
from .scheduling.stay_reconciler import StayAdjustment
from .types import Schedule, ScheduledStop, Stop, TransportMode, Trip

TRANSPORT_MODES = get_args(TransportMode)


def trip_from_dict(data: dict) -> Trip:
    """Build a Trip from a stored document. Raises KeyError on missing fields."""
    return Trip(
        id=data["id"],
        title=data.get("title", ""),
        start_date=data["startDate"],
        duration_days=int(data.get("durationDays", 1)),
        start_time=data.get("startTime") or None,
        total_cost=float(data.get("totalCost", 0.0)),
        timezone=data.get("timezone"),
    )


def trip_to_dict(trip: Trip) -> dict:
    return {
        "id": trip.id,
        "title": trip.title,
        "startDate": trip.start_date,
        "durationDays": trip.duration_days,
        "startTime": trip.start_time,
        "totalCost": trip.total_cost,
        "timezone": trip.timezone,
    }


def stop_from_dict(data: dict) -> Stop:
    """
    Build a Stop from a stored document.

    Raises:
        KeyError: on missing required fields
        ValueError: on an unknown transport mode
    """
    travel_minutes = data.get("travelMinutes")
    transport_mode = data.get("transportMode") or DEFAULT_TRANSPORT_MODE
    if transport_mode not in TRANSPORT_MODES:
        raise ValueError(f"Unknown transport mode: {transport_mode}")
    return Stop(
        id=data["id"],
        name=data.get("name", ""),
        order=int(data["order"]),
        duration_hours=float(data.get("duration", 1.0)),
        notes=data.get("notes") or "",
        is_fixed_time=bool(data.get("isFixedTime", False)),
        fixed_date=data.get("fixedDate") or None,
        fixed_time=data.get("fixedTime") or None,
        travel_minutes=int(travel_minutes) if travel_minutes is not None else None,
        transport_mode=transport_mode,
    )


def stop_to_dict(stop: Stop) -> dict:
    return {
        "id": stop.id,
        "name": stop.name,
        "order": stop.order,
        "duration": stop.duration_hours,
        "notes": stop.notes,
        "isFixedTime": stop.is_fixed_time,
        "fixedDate": stop.fixed_date,
        "fixedTime": stop.fixed_time,
        "travelMinutes": stop.travel_minutes,
        "transportMode": stop.transport_mode,
    }


def scheduled_stop_to_dict(item: ScheduledStop) -> dict:
    return {
        **stop_to_dict(item.stop),
        "arrival": item.arrival.isoformat(timespec="minutes"),
        "departure": item.departure.isoformat(timespec="minutes"),
        "arrivalTime": item.arrival_time,
        "departureTime": item.departure_time,
        "day": item.day,
        "displayDate": item.display_date,
    }


def schedule_to_dict(schedule: Schedule) -> dict:
    """
    Convert a schedule to JSON-serializable form.

    JSON object keys must be strings, so day numbers become "1", "2", ...
    """
    return {
        str(day): {
            "day": bucket.day,
            "dateKey": bucket.date,
            "displayDate": bucket.display_date,
            "stops": [scheduled_stop_to_dict(item) for item in bucket.items],
        }
        for day, bucket in schedule.items()
    }


def adjustment_to_dict(adjustment: StayAdjustment | None) -> dict | None:
    if adjustment is None:
        return None
    return {
        "predecessorId": adjustment.predecessor_id,
        "predecessorArrival": adjustment.predecessor_arrival.isoformat(timespec="minutes"),
        "requiredDeparture": adjustment.required_departure.isoformat(timespec="minutes"),
        "duration": adjustment.duration_hours,
        "feasible": adjustment.feasible,
        "warning": adjustment.warning,
    }
