"""Loading utilities for timeline settings and item records."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from timeline_primitives.calendar import WorkdayCalendar, WorkdayConfig
from timeline_primitives.resolution import DAY, Granularity
from timeline_primitives.schema import validate_item, validate_settings
from timeline_primitives.types import CalendarPoint, Item, ItemKind, Timing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineSettings:
    """Everything the calendar and drag layers read from app settings."""

    calendar: WorkdayCalendar
    granularity: Granularity = DAY


def settings_from_dict(data: dict, source: str = "settings") -> TimelineSettings:
    """Build TimelineSettings from an application settings dict.

    Recognised keys: workdayConfig, customHolidays, customEvents, minDayUnit.
    Anything else (palette, colours, app name) is ignored. Missing keys fall
    back to the defaults: Mon-Fri working, holidays off, whole days.

    Raises ValueError if validation fails.
    """
    errors = validate_settings(data)
    if errors:
        raise ValueError(
            f"Validation errors in {source}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    config = WorkdayConfig(**data.get("workdayConfig", {}))
    calendar = WorkdayCalendar(
        config,
        custom_holidays=(date.fromisoformat(s) for s in data.get("customHolidays", [])),
        custom_events=(date.fromisoformat(s) for s in data.get("customEvents", [])),
    )
    granularity = Granularity.from_unit(data.get("minDayUnit", 1))
    logger.debug("Loaded %s: %r, granularity=%s", source, calendar, granularity.label)
    return TimelineSettings(calendar=calendar, granularity=granularity)


def load_settings_json(path: str | Path) -> TimelineSettings:
    """Load TimelineSettings from a settings JSON file.

    The file is either the settings object itself or wraps it:
    { "settings": { "workdayConfig": {...}, ... } }

    Raises ValueError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    return settings_from_dict(data.get("settings", data), source=path.name)


def item_from_dict(data: dict) -> Item:
    """Build an Item from a stored record, clamping rather than rejecting.

    Missing timing defaults to AM for the start and PM for the end. Progress
    is clamped to 0-100, an inverted range collapses to end == start, and a
    milestone is pinned to its start date, AM/AM.

    Raises ValueError if the record is structurally invalid.
    """
    errors = validate_item(data)
    if errors:
        raise ValueError("\n".join(errors))

    kind = ItemKind(data.get("type") or ItemKind.TASK.value)
    start = CalendarPoint(
        date.fromisoformat(data["startDate"]),
        Timing(data.get("startTime") or Timing.AM.value),
    )
    end = CalendarPoint(
        date.fromisoformat(data["endDate"]),
        Timing(data.get("endTime") or Timing.PM.value),
    )

    if kind is ItemKind.MILESTONE:
        start = end = CalendarPoint(start.date, Timing.AM)
    elif end < start:
        logger.warning("Item %r ends before it starts; clamping", data["id"])
        end = start

    progress = int(round(data.get("progress") or 0))
    span = data.get("workdays")

    return Item(
        id=data["id"],
        start=start,
        end=end,
        span=float(span) if span is not None else None,
        progress=max(0, min(100, progress)),
        kind=kind,
        name=data.get("name", ""),
    )


def item_to_dict(item: Item) -> dict:
    """Inverse of item_from_dict, using the application's record keys."""
    record = {
        "id": item.id,
        "name": item.name,
        "startDate": item.start.date.isoformat(),
        "startTime": item.start.timing.value,
        "endDate": item.end.date.isoformat(),
        "endTime": item.end.timing.value,
        "progress": item.progress,
        "type": item.kind.value,
    }
    if item.span is not None:
        record["workdays"] = item.span
    return record
