"""Shared test fixtures for sheetcal tests.

This module provides common fixtures used across all test modules:
- Sample header rows and grids
- In-memory grid backends
- A mapper with a deterministic clock

Usage:
    async def test_something(mapper, memory_backend):
        events = await mapper.list_events()
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from sheetcal.sheets.backends.memory import InMemoryGridBackend
from sheetcal.sheets.mapper import EventSheetMapper
from sheetcal.sheets.models import EVENT_FIELDS


# ─────────────────────────────────────────────────────────────────────────────
# Constants
# ─────────────────────────────────────────────────────────────────────────────

SHEET = "work05_sche"


# ─────────────────────────────────────────────────────────────────────────────
# Grid Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def header() -> list[str]:
    """Header row in canonical column order."""
    return list(EVENT_FIELDS)


@pytest.fixture
def standup_row() -> list[str]:
    return ["t1", "Standup", "Mon", "09", "00", "09", "15", "work"]


@pytest.fixture
def sample_grid(header, standup_row) -> list[list[str]]:
    """Header plus three events.

    Returns:
        Grid as the Sheets API would return it
    """
    return [
        header,
        standup_row,
        ["t2", "Gym", "Tue", "18", "30", "19", "30", "health"],
        ["t3", "Review", "Fri", "14", "00", "15", "00", "work"],
    ]


@pytest.fixture
def memory_backend(sample_grid) -> InMemoryGridBackend:
    return InMemoryGridBackend({SHEET: sample_grid})


# ─────────────────────────────────────────────────────────────────────────────
# Mapper Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock advancing one millisecond per call, starting 2024-05-01 09:30:12.345 UTC."""
    start = datetime(2024, 5, 1, 9, 30, 12, 345000, tzinfo=timezone.utc)
    calls = {"n": 0}

    def clock() -> datetime:
        now = start + timedelta(milliseconds=calls["n"])
        calls["n"] += 1
        return now

    return clock


@pytest.fixture
def mapper(memory_backend, fixed_clock) -> EventSheetMapper:
    return EventSheetMapper(memory_backend, sheet_name=SHEET, clock=fixed_clock)


@pytest.fixture
def sample_payload() -> dict:
    """Body of a valid POST /api/event request."""
    return {
        "title": "Lunch",
        "day": "Wed",
        "h1": "12",
        "m1": "00",
        "h2": "13",
        "m2": "00",
        "category": "private",
    }
