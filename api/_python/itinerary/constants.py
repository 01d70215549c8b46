"""
Named timing constants.

These values are visible to every consumer of a rendered schedule, so they
must stay stable across releases.
"""

DEFAULT_START_TIME = "08:00"  # Trip day start when the trip has no start_time
DEFAULT_TRAVEL_MINUTES = 30  # Travel lead time when a stop has no travel_minutes
OVERNIGHT_THRESHOLD_HOUR = 22  # Non-fixed arrivals at/after this hour roll to next day
DEFAULT_ANCHOR_TIME = "08:00"  # Fixed time given to the first stop added to an empty day
DURATION_PRECISION = 2  # Decimal places kept when reconciling a stay duration
DEFAULT_TRANSPORT_MODE = "driving"
