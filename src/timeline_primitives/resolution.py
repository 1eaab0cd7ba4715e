"""Boundary: Granularity — continuous day offsets to discrete calendar steps."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from timeline_primitives.types import CalendarPoint, Timing


def round_half_away(x: float) -> int:
    """Round to the nearest integer, ties away from zero.

    Symmetric around zero, so round_half_away(-x) == -round_half_away(x).
    """
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


@dataclass(frozen=True)
class Granularity:
    """Smallest calendar step a pointer gesture can produce. Immutable.

    Stepping is mechanical: workday rules are ignored. It converts a raw
    pointer distance into a calendar offset, it does not preserve durations.
    """

    unit_days: float
    label: str

    def steps(self, delta_days: float) -> int:
        """Whole steps of this granularity nearest to `delta_days`."""
        return round_half_away(delta_days / self.unit_days)

    def step(self, point: CalendarPoint, delta_days: float) -> CalendarPoint:
        """Offset `point` by `delta_days`, snapped to this granularity.

        Whole-day granularity keeps the timing. Half-day granularity walks
        AM -> PM -> next AM forward, and the mirror image backward.
        """
        n = self.steps(delta_days)
        if self.unit_days >= 1:
            return CalendarPoint(point.date + timedelta(days=n), point.timing)

        current_date = point.date
        timing = point.timing
        for _ in range(abs(n)):
            if n > 0:
                if timing is Timing.AM:
                    timing = Timing.PM
                else:
                    current_date += timedelta(days=1)
                    timing = Timing.AM
            else:
                if timing is Timing.PM:
                    timing = Timing.AM
                else:
                    current_date -= timedelta(days=1)
                    timing = Timing.PM
        return CalendarPoint(current_date, timing)

    @classmethod
    def from_unit(cls, unit: float) -> Granularity:
        """Predefined granularity for a configured minimum day unit.

        Raises ValueError for anything other than 1 or 0.5.
        """
        for candidate in (DAY, HALF_DAY):
            if candidate.unit_days == unit:
                return candidate
        raise ValueError(
            f"Unsupported minimum day unit {unit!r}; expected 1 or 0.5"
        )


DAY = Granularity(unit_days=1.0, label="day")
HALF_DAY = Granularity(unit_days=0.5, label="half-day")


def step(
    point: CalendarPoint, delta_days: float, granularity: Granularity = DAY
) -> CalendarPoint:
    """Module-level shorthand for granularity.step(point, delta_days)."""
    return granularity.step(point, delta_days)


def day_delta(original: CalendarPoint, current: CalendarPoint) -> float:
    """Signed distance in days between two points, in half-day increments."""
    return (current.half_days - original.half_days) / 2


class ViewMode(str, Enum):
    DAY = "Day"
    WEEK = "Week"
    MONTH = "Month"


_PIXELS_PER_DAY = {
    ViewMode.DAY: 38.0,
    ViewMode.WEEK: 12.0,
    ViewMode.MONTH: 4.0,
}

# Day view widens so that half-day cells stay grabbable
_EXPANDED_DAY_PIXELS = 60.0


def pixels_per_day(view_mode: ViewMode, granularity: Granularity = DAY) -> float:
    """Horizontal scale of the timeline for a view zoom."""
    if view_mode is ViewMode.DAY and granularity.unit_days < 1:
        return _EXPANDED_DAY_PIXELS
    return _PIXELS_PER_DAY[view_mode]
