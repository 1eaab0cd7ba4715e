"""timeline-primitives: Working-calendar arithmetic and drag editing for Gantt timelines."""

from timeline_primitives.calendar import WorkdayCalendar, WorkdayConfig
from timeline_primitives.drag import (
    BarGeometry,
    DragController,
    DragMode,
    DragSession,
    DragState,
    Modifiers,
)
from timeline_primitives.holidays import holidays_for_year
from timeline_primitives.resolution import DAY, HALF_DAY, Granularity, ViewMode, step
from timeline_primitives.selection import Selection
from timeline_primitives.types import (
    CalendarError,
    CalendarPoint,
    Item,
    ItemKind,
    Timing,
)

__all__ = [
    "BarGeometry",
    "CalendarError",
    "CalendarPoint",
    "DAY",
    "DragController",
    "DragMode",
    "DragSession",
    "DragState",
    "Granularity",
    "HALF_DAY",
    "Item",
    "ItemKind",
    "Modifiers",
    "Selection",
    "Timing",
    "ViewMode",
    "WorkdayCalendar",
    "WorkdayConfig",
    "holidays_for_year",
    "step",
]
