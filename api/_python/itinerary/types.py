"""
Data structures for itinerary timing.

Trip and Stop are the persisted records supplied by the store; ScheduledStop
and DayBucket are derived on every simulation and never stored.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from .constants import DEFAULT_START_TIME, DEFAULT_TRAVEL_MINUTES

TransportMode = Literal["driving", "transit", "walking"]


@dataclass
class Trip:
    """A multi-day trip. Read-only to the timing engine."""

    id: str
    title: str
    start_date: str  # "2024-06-01" ISO date, no time
    duration_days: int = 1  # Whole days, >= 1
    start_time: str | None = None  # "HH:MM" day start, DEFAULT_START_TIME when absent
    total_cost: float = 0.0  # Maintained by the expense subsystem
    timezone: str | None = None  # IANA timezone, only used to resolve "today"

    @property
    def day_start_time(self) -> str:
        """Start time-of-day for every trip day."""
        return self.start_time or DEFAULT_START_TIME


@dataclass
class Stop:
    """Single visit on the itinerary."""

    id: str
    name: str
    order: int  # Sequencing key, ascending
    duration_hours: float = 1.0  # Stay duration, fractional hours allowed
    notes: str = ""

    # Fixed-time anchor (only meaningful when is_fixed_time is True)
    is_fixed_time: bool = False
    fixed_date: str | None = None  # "YYYY-MM-DD"
    fixed_time: str | None = None  # "HH:MM"

    travel_minutes: int | None = None  # Minutes from the previous stop
    transport_mode: TransportMode = "driving"  # Display only

    @property
    def has_anchor(self) -> bool:
        """True if the stop pins its arrival to a concrete date and time."""
        return bool(self.is_fixed_time and self.fixed_date and self.fixed_time)

    @property
    def travel_lead_minutes(self) -> int:
        """Travel minutes with the default applied."""
        if self.travel_minutes is None:
            return DEFAULT_TRAVEL_MINUTES
        return self.travel_minutes


@dataclass
class ScheduledStop:
    """A stop with its computed timing for one simulation."""

    stop: Stop
    arrival: datetime
    departure: datetime
    day: int  # 1-based, relative to trip start date
    display_date: str  # "Sat, Jun 1"

    @property
    def arrival_time(self) -> str:
        """Arrival as 24-hour "HH:MM"."""
        return self.arrival.strftime("%H:%M")

    @property
    def departure_time(self) -> str:
        """Departure as 24-hour "HH:MM"."""
        return self.departure.strftime("%H:%M")


@dataclass
class DayBucket:
    """
    Stops for one trip day.

    Buckets exist only for days that received at least one stop; a missing
    day number means "no stops".
    """

    day: int
    date: str  # "2024-06-01" date key
    display_date: str
    items: list[ScheduledStop] = field(default_factory=list)


# Day number -> bucket, in the order buckets were first used
Schedule = dict[int, DayBucket]
