"""Shared types: CalendarPoint, Item and CalendarError."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum


class Timing(str, Enum):
    """Half of a day. AM sorts before PM."""

    AM = "AM"
    PM = "PM"


class ItemKind(str, Enum):
    TASK = "task"
    MILESTONE = "milestone"


@dataclass(frozen=True, order=True)
class CalendarPoint:
    """A half-day-resolution instant: a date plus the half of that date.

    Points order chronologically: (date, AM) < (date, PM) < (date + 1, AM).
    """

    date: date
    timing: Timing = Timing.AM

    @property
    def half_days(self) -> int:
        """Absolute half-day index, usable for differences between points."""
        return self.date.toordinal() * 2 + (1 if self.timing is Timing.PM else 0)

    def isoformat(self) -> str:
        return f"{self.date.isoformat()} {self.timing.value}"


@dataclass(frozen=True)
class Item:
    """Immutable scheduled item as seen by the calendar and drag layers.

    Invariants:
        - start <= end
        - Milestones have start == end, both AM
        - span, when present, is advisory (a cached workday span)
    """

    id: str
    start: CalendarPoint
    end: CalendarPoint
    span: float | None = None
    progress: int = 0
    kind: ItemKind = ItemKind.TASK
    name: str = ""

    @property
    def is_milestone(self) -> bool:
        return self.kind is ItemKind.MILESTONE

    def with_dates(
        self,
        start: CalendarPoint,
        end: CalendarPoint,
        span: float | None = None,
    ) -> Item:
        """Copy with new endpoints. The cached span is kept unless given."""
        return replace(
            self, start=start, end=end,
            span=self.span if span is None else span,
        )

    def with_progress(self, progress: int) -> Item:
        return replace(self, progress=progress)


class CalendarError(ValueError):
    """Raised when a workday calendar configuration cannot be used."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Unusable calendar configuration: {reason}")
