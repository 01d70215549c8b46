#!/usr/bin/env python3
"""
Generate a trip's day-by-day schedule from a JSON request file.

Usage: python3 generate_itinerary.py <request_file.json>

The request holds {"trip": {...}, "stops": [...]} in stored document form.
Outputs {"trip", "today", "schedule"} as JSON to stdout; log messages go to
stderr.
"""

import json
import logging
import os
import sys

from itinerary.scheduling.timeline_simulator import simulate
from itinerary.serialization import schedule_to_dict, stop_from_dict, trip_from_dict, trip_to_dict
from itinerary.timeline_math import current_trip_day


def main() -> None:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING"), stream=sys.stderr)

    if len(sys.argv) != 2:
        print(json.dumps({"error": "Usage: generate_itinerary.py <request_file.json>"}))
        sys.exit(1)

    request_file = sys.argv[1]

    try:
        with open(request_file) as f:
            data = json.load(f)

        trip = trip_from_dict(data["trip"])
        stops = [stop_from_dict(s) for s in data.get("stops", [])]

        schedule = simulate(trip, stops)
        today = current_trip_day(trip.start_date, trip.duration_days, trip.timezone)

        print(
            json.dumps(
                {
                    "trip": trip_to_dict(trip),
                    "today": today,
                    "schedule": schedule_to_dict(schedule),
                }
            )
        )

    except FileNotFoundError:
        print(json.dumps({"error": f"Request file not found: {request_file}"}))
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON in request file: {e}"}))
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
