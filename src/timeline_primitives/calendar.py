"""Layer 1: WorkdayCalendar — half-day working-day arithmetic."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, timedelta
from typing import Iterable, Iterator

from timeline_primitives.holidays import holidays_for_year
from timeline_primitives.types import CalendarError, CalendarPoint, Timing

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


@dataclass(frozen=True)
class WorkdayConfig:
    """Which days count as working (True = working).

    `holidays` and `custom` decide whether national holidays and custom
    holidays are worked; they take precedence over the weekday flags.
    """

    monday: bool = True
    tuesday: bool = True
    wednesday: bool = True
    thursday: bool = True
    friday: bool = True
    saturday: bool = False
    sunday: bool = False
    holidays: bool = False
    custom: bool = False

    def works_weekday(self, weekday: int) -> bool:
        """Weekday flag lookup, Monday == 0."""
        return getattr(self, WEEKDAY_NAMES[weekday])

    @property
    def working_weekdays(self) -> tuple[int, ...]:
        return tuple(i for i in range(7) if self.works_weekday(i))

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


class WorkdayCalendar:
    """Horizon-free workday calendar. Answers queries by lazy day-by-day walk.

    Immutable: the config and both custom date sets are fixed at
    construction, so every query is a pure function of its arguments.
    Custom events are display-only and never affect working status.
    """

    def __init__(
        self,
        config: WorkdayConfig | None = None,
        custom_holidays: Iterable[date] = (),
        custom_events: Iterable[date] = (),
    ) -> None:
        self.config = config if config is not None else WorkdayConfig()
        self.custom_holidays: frozenset[date] = frozenset(custom_holidays)
        self.custom_events: frozenset[date] = frozenset(custom_events)

        # National holidays recur every year; custom holidays run out
        if not self.config.working_weekdays and not self.config.holidays:
            raise CalendarError(
                "no weekday is marked as working and national holidays are not worked"
            )

        overlap = self.custom_holidays & self.custom_events
        if overlap:
            listed = ", ".join(d.isoformat() for d in sorted(overlap))
            raise CalendarError(
                f"dates marked both custom holiday and event: {listed}"
            )

    def __repr__(self) -> str:
        return (
            f"WorkdayCalendar(config={self.config!r}, "
            f"custom_holidays={len(self.custom_holidays)}, "
            f"custom_events={len(self.custom_events)})"
        )

    # ------------------------------------------------------------------
    # Day classification
    # ------------------------------------------------------------------

    def is_workday(self, d: date) -> bool:
        """Whether `d` counts toward an item's duration.

        First match wins: custom holiday, then national holiday, then the
        weekday's own flag.
        """
        if d in self.custom_holidays:
            return self.config.custom
        if d in holidays_for_year(d.year):
            return self.config.holidays
        return self.config.works_weekday(d.weekday())

    def is_custom_holiday(self, d: date) -> bool:
        return d in self.custom_holidays

    def is_event(self, d: date) -> bool:
        return d in self.custom_events

    def is_holiday(self, d: date) -> bool:
        """National or custom holiday, regardless of whether it is worked."""
        return d in self.custom_holidays or d in holidays_for_year(d.year)

    def workdays_in_range(self, start: date, end: date) -> Iterator[date]:
        """Yield each working date in [start, end], inclusive."""
        current = start
        while current <= end:
            if self.is_workday(current):
                yield current
            current += timedelta(days=1)

    # ------------------------------------------------------------------
    # Span arithmetic
    # ------------------------------------------------------------------

    def workday_span(self, start: CalendarPoint, end: CalendarPoint) -> float:
        """Working days covered by [start, end], at half-day resolution.

        A PM start forfeits the morning of the start date, and an AM end
        forfeits the afternoon of the end date, but only when that date is
        itself a working day; a non-working date contributed nothing to
        forfeit. Inverted ranges give 0.
        """
        if start.date > end.date:
            return 0.0

        count = float(sum(1 for _ in self.workdays_in_range(start.date, end.date)))

        if start.timing is Timing.PM and self.is_workday(start.date):
            count -= 0.5
        if end.timing is Timing.AM and self.is_workday(end.date):
            count -= 0.5

        return max(0.0, count)

    def project_end(self, start: CalendarPoint, span: float) -> CalendarPoint:
        """Forward walk: start + span working days -> end point.

        The span is consumed in half-day units. A working start date offers
        1.0 from AM or 0.5 from PM; every later working date offers 1.0.
        A zero span returns the start unchanged.
        """
        if span <= 0:
            return start

        remaining = span
        current = start.date

        if self.is_workday(current):
            if remaining <= 0.5:
                return CalendarPoint(current, start.timing)
            remaining -= 1.0 if start.timing is Timing.AM else 0.5

        while remaining > 0:
            current += timedelta(days=1)
            if self.is_workday(current):
                if remaining <= 0.5:
                    return CalendarPoint(current, Timing.AM)
                remaining -= 1.0

        return CalendarPoint(current, Timing.PM)
