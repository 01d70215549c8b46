"""
Pytest fixtures for itinerary timing tests.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from helpers import make_stop
from itinerary.store import InMemoryStopStore
from itinerary.types import Trip


@pytest.fixture
def one_day_trip():
    """Single-day trip starting 2024-06-01 at the default 08:00."""
    return Trip(id="trip-1", title="Taipei day trip", start_date="2024-06-01", duration_days=1)


@pytest.fixture
def two_day_trip():
    """Two-day trip starting 2024-06-01."""
    return Trip(id="trip-2", title="Tainan weekend", start_date="2024-06-01", duration_days=2)


@pytest.fixture
def three_day_trip():
    """Three-day trip starting 2024-06-01."""
    return Trip(id="trip-3", title="East coast", start_date="2024-06-01", duration_days=3)


@pytest.fixture
def basic_stops():
    """A (1h) then B (2h, 30 min travel)."""
    return [
        make_stop("A", 0, duration_hours=1.0),
        make_stop("B", 1, duration_hours=2.0, travel_minutes=30),
    ]


@pytest.fixture
def store(one_day_trip, basic_stops):
    """In-memory store seeded with the one-day trip and basic stops."""
    store = InMemoryStopStore()
    store.add_trip(one_day_trip, basic_stops)
    return store
