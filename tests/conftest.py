"""Shared test fixtures and data loading for timeline-primitives.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference week: Mon 2024-06-03 through Sun 2024-06-09 (no national holidays).
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")
_calendars = _load_json(FIXTURES_DIR / "calendars.json")

# Day lookup:  DAYS["mon"] → date(2024, 6, 3)
DAYS: dict[str, date] = {
    _d["name"]: date.fromisoformat(_d["date"]) for _d in _reference["days"]
}


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def point(day: str, timing: str = "AM"):
    """CalendarPoint from a day name ("mon") or an ISO date string.

    >>> point("mon", "PM")
    CalendarPoint(date=datetime.date(2024, 6, 3), timing=<Timing.PM: 'PM'>)
    """
    from timeline_primitives.types import CalendarPoint, Timing

    d = DAYS[day] if day in DAYS else date.fromisoformat(day)
    return CalendarPoint(d, Timing(timing))


def parse_point(pair: list[str]):
    """Convert ["2024-06-03", "AM"] to a CalendarPoint."""
    return point(pair[0], pair[1])


def make_item(
    item_id: str,
    start: tuple[str, str],
    end: tuple[str, str],
    span: float | None = None,
    progress: int = 0,
    kind: str = "task",
):
    """Build an Item from (day, timing) pairs."""
    from timeline_primitives.types import Item, ItemKind

    return Item(
        id=item_id,
        start=point(*start),
        end=point(*end),
        span=span,
        progress=progress,
        kind=ItemKind(kind),
    )


# ---------------------------------------------------------------------------
# Calendar factory
# ---------------------------------------------------------------------------
def make_calendar(name: str):
    """Build a WorkdayCalendar from calendars.json by name."""
    from timeline_primitives.calendar import WorkdayCalendar, WorkdayConfig

    config = _calendars[name]
    return WorkdayCalendar(
        WorkdayConfig(**config["workdayConfig"]),
        custom_holidays=[date.fromisoformat(s) for s in config["customHolidays"]],
        custom_events=[date.fromisoformat(s) for s in config["customEvents"]],
    )


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def standard_calendar():
    return make_calendar("standard")


@pytest.fixture
def custom_calendar():
    return make_calendar("custom")


@pytest.fixture
def settings_path() -> Path:
    return FIXTURES_DIR / "settings.json"
