"""Input validation for timeline settings and item records."""

from __future__ import annotations

from datetime import date

from timeline_primitives.calendar import WEEKDAY_NAMES, WorkdayConfig

_TIMINGS = ("AM", "PM")
_KINDS = ("task", "milestone")
_DAY_UNITS = (1, 0.5)


def _parse_dates(values: object, label: str, errors: list[str]) -> set[date]:
    """Collect valid ISO dates from a list, appending errors for the rest."""
    parsed: set[date] = set()
    if not isinstance(values, list):
        errors.append(f"{label} must be a list of ISO dates")
        return parsed
    for i, value in enumerate(values):
        try:
            parsed.add(date.fromisoformat(value))
        except (ValueError, TypeError):
            errors.append(f"{label}[{i}]: invalid date {value!r}")
    return parsed


def validate_settings(data: dict) -> list[str]:
    """Validate an application settings dict. Returns error messages (empty = valid).

    Checks:
    - workdayConfig flags are booleans, and some day can be worked (a
      weekday, or national holidays)
    - customHolidays / customEvents hold ISO dates and do not overlap
    - minDayUnit is 1 or 0.5
    """
    errors: list[str] = []

    config = data.get("workdayConfig", {})
    if not isinstance(config, dict):
        errors.append("workdayConfig must be an object")
        config = {}

    for key, value in config.items():
        if key not in WorkdayConfig.field_names():
            errors.append(f"workdayConfig: unknown flag {key!r}")
        elif not isinstance(value, bool):
            errors.append(f"workdayConfig.{key} must be boolean")

    defaults = WorkdayConfig()
    if not any(
        config.get(name, getattr(defaults, name)) is True
        for name in (*WEEKDAY_NAMES, "holidays")
    ):
        errors.append(
            "workdayConfig: at least one weekday must be working "
            "unless national holidays are worked"
        )

    holidays = _parse_dates(data.get("customHolidays", []), "customHolidays", errors)
    events = _parse_dates(data.get("customEvents", []), "customEvents", errors)
    for d in sorted(holidays & events):
        errors.append(
            f"{d.isoformat()} is both a custom holiday and a custom event"
        )

    unit = data.get("minDayUnit", 1)
    if isinstance(unit, bool) or unit not in _DAY_UNITS:
        errors.append(f"minDayUnit must be 1 or 0.5, got {unit!r}")

    return errors


def validate_item(data: dict) -> list[str]:
    """Validate an item record. Returns error messages (empty = valid).

    Checks:
    - id is a non-empty string
    - startDate / endDate parse as ISO dates
    - startTime / endTime, when present, are AM or PM
    - progress and workdays, when present, are numbers
    - type, when present, is task or milestone
    """
    errors: list[str] = []
    item_id = data.get("id")
    label = f"Item {item_id!r}"

    if not isinstance(item_id, str) or not item_id:
        errors.append(f"{label}: missing 'id'")

    for key in ("startDate", "endDate"):
        try:
            date.fromisoformat(data[key])
        except KeyError:
            errors.append(f"{label}: missing '{key}'")
        except (ValueError, TypeError):
            errors.append(f"{label}: invalid {key} {data[key]!r}")

    for key in ("startTime", "endTime"):
        if data.get(key) is not None and data[key] not in _TIMINGS:
            errors.append(f"{label}: {key} must be AM or PM, got {data[key]!r}")

    for key in ("progress", "workdays"):
        value = data.get(key)
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, (int, float))
        ):
            errors.append(f"{label}: {key} must be a number")

    if data.get("type") is not None and data["type"] not in _KINDS:
        errors.append(f"{label}: type must be task or milestone")

    return errors
