"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from datetime import date, timedelta

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _day_label(d: date) -> str:
    return f"{DAY_NAMES[d.weekday()]} {d.strftime('%d %b')}"


def show_calendar(
    cal: "WorkdayCalendar",  # noqa: F821 — avoid circular import
    start: date,
    end: date,
) -> str:
    """Print ASCII calendar view showing working days for a date range.

    Each row is one day: '##' = working, '..' = non-working, followed by
    H (national holiday), C (custom holiday) or E (custom event).
    Returns the string and also prints to stdout.

    Args:
        cal: WorkdayCalendar instance
        start: First date to show (inclusive)
        end: Last date to show (exclusive)
    """
    lines: list[str] = [f"{'':>10s}  AMPM"]

    current = start
    while current < end:
        cells = "##" if cal.is_workday(current) else ".."
        if cal.is_custom_holiday(current):
            flag = "C"
        elif cal.is_holiday(current):
            flag = "H"
        elif cal.is_event(current):
            flag = "E"
        else:
            flag = ""
        lines.append(f"{_day_label(current):>10s}  {cells} {flag}".rstrip())
        current += timedelta(days=1)

    result = "\n".join(lines)
    print(result)
    return result


def show_items(
    items: list["Item"],  # noqa: F821
    start: date,
    end: date,
) -> str:
    """Print ASCII timeline of items, two cells (AM, PM) per day.

    Legend: '=' = covered by the item, '.' = outside it.
    Returns the string and also prints to stdout.

    Args:
        items: Items to draw, one row each
        start: First date of the timeline (inclusive)
        end: Last date of the timeline (exclusive)
    """
    lines: list[str] = []
    n_days = (end - start).days
    width = max((len(item.id) for item in items), default=0)

    header = "".join(
        f"{(start + timedelta(days=i)).day:<2d}" for i in range(n_days)
    )
    lines.append(f"{'':>{width}s}  {header}")

    first_half = start.toordinal() * 2
    for item in items:
        lo = item.start.half_days - first_half
        hi = item.end.half_days - first_half
        row = "".join("=" if lo <= i <= hi else "." for i in range(n_days * 2))
        lines.append(f"{item.id:>{width}s}  {row}")

    result = "\n".join(lines)
    print(result)
    return result
