#!/usr/bin/env python3
"""
Add or edit a stop and print the recomputed schedule.

Usage: python3 save_stop.py <request_file.json>

The request holds {"trip": {...}, "stops": [...], "stop": {...}} plus an
optional "viewDay" (the day the user is adding from). A "stop" without an
"order" is appended after the existing stops. Outputs the saved stop, the
updated stop list, any predecessor adjustment, warnings and the schedule.
"""

import json
import logging
import os
import sys

from itinerary.editing import next_order, save_stop
from itinerary.serialization import (
    adjustment_to_dict,
    schedule_to_dict,
    stop_from_dict,
    stop_to_dict,
    trip_from_dict,
)
from itinerary.store import InMemoryStopStore, RecordNotFoundError


def main() -> None:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING"), stream=sys.stderr)

    if len(sys.argv) != 2:
        print(json.dumps({"error": "Usage: save_stop.py <request_file.json>"}))
        sys.exit(1)

    request_file = sys.argv[1]

    try:
        with open(request_file) as f:
            data = json.load(f)

        trip = trip_from_dict(data["trip"])
        stops = [stop_from_dict(s) for s in data.get("stops", [])]

        store = InMemoryStopStore()
        store.add_trip(trip, stops)

        candidate_data = dict(data["stop"])
        if candidate_data.get("order") is None:
            candidate_data["order"] = next_order(stops)
        candidate = stop_from_dict(candidate_data)

        view_day = data.get("viewDay")
        if view_day is not None:
            view_day = int(view_day)

        outcome = save_stop(store, trip.id, candidate, view_day=view_day)

        print(
            json.dumps(
                {
                    "stop": stop_to_dict(outcome.stop),
                    "stops": [stop_to_dict(s) for s in store.list_stops(trip.id)],
                    "adjustment": adjustment_to_dict(outcome.adjustment),
                    "warnings": outcome.warnings,
                    "schedule": schedule_to_dict(outcome.schedule),
                }
            )
        )

    except FileNotFoundError:
        print(json.dumps({"error": f"Request file not found: {request_file}"}))
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON in request file: {e}"}))
        sys.exit(1)
    except RecordNotFoundError as e:
        print(json.dumps({"error": str(e)}))
        sys.exit(1)
    except KeyError as e:
        print(json.dumps({"error": f"Missing required field: {e}"}))
        sys.exit(1)
    except ValueError as e:
        print(json.dumps({"error": f"Invalid value: {e}"}))
        sys.exit(1)
    except TypeError as e:
        print(json.dumps({"error": f"Invalid field type: {e}"}))
        sys.exit(1)


if __name__ == "__main__":
    main()
