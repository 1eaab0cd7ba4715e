"""Layer 2: DragController — pointer gestures to calendar edits.

One controller serves one timeline view. A gesture runs
IDLE -> ARMED (pointer down) -> DRAGGING (movement past the preview threshold)
-> IDLE (pointer up or cancel). While a session is active the host keeps
global move/up listeners attached; `on_attach` and `on_detach` bracket
that lifetime.

Snapshots taken at pointer-down are never mutated. Live previews and the
committed records are both derived from (snapshot, pointer position), so
intermediate move events can be coalesced or dropped without changing the
result. The caller's item list is only touched through `on_commit`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Callable, Collection, Sequence

from timeline_primitives.calendar import WorkdayCalendar
from timeline_primitives.resolution import (
    DAY,
    Granularity,
    ViewMode,
    day_delta,
    pixels_per_day,
    round_half_away,
)
from timeline_primitives.types import CalendarPoint, Item, Timing

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_PX = 5.0
DEFAULT_PIXELS_PER_DAY = pixels_per_day(ViewMode.DAY)


class DragMode(str, Enum):
    """Which control surface of the bar was grabbed."""

    MOVE = "move"
    RESIZE_LEFT = "resize-left"
    RESIZE_RIGHT = "resize-right"
    CHANGE_PROGRESS = "change-progress"


class DragState(Enum):
    IDLE = "idle"
    ARMED = "armed"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class Modifiers:
    """Modifier keys held at pointer-down."""

    multi: bool = False
    range: bool = False

    @property
    def any(self) -> bool:
        return self.multi or self.range


@dataclass(frozen=True)
class BarGeometry:
    """Horizontal extent of a rendered bar, in content pixels."""

    left: float
    width: float

    @classmethod
    def for_item(
        cls, item: Item, timeline_start: date, pixels_per_day: float
    ) -> BarGeometry:
        """Geometry of a bar drawn over whole days, start to end inclusive."""
        offset_days = (item.start.date - timeline_start).days
        length_days = (item.end.date - item.start.date).days + 1
        return cls(
            left=offset_days * pixels_per_day,
            width=length_days * pixels_per_day,
        )

    def progress_at(self, x: float) -> int:
        """Completion percentage for a pointer at content x, clamped to 0-100."""
        if self.width <= 0:
            return 0
        raw = round_half_away((x - self.left) / self.width * 100)
        return max(0, min(100, raw))


@dataclass(frozen=True)
class ItemSnapshot:
    """An item as it was at pointer-down, with its resolved span."""

    item: Item
    span: float

    @property
    def start(self) -> CalendarPoint:
        return self.item.start

    @property
    def end(self) -> CalendarPoint:
        return self.item.end

    @property
    def progress(self) -> int:
        return self.item.progress


@dataclass
class DragSession:
    """Transient state of one gesture. Owned by the DragController."""

    item_id: str
    mode: DragMode
    origin_x: float
    snapshots: dict[str, ItemSnapshot]
    bar: BarGeometry | None = None
    state: DragState = DragState.ARMED
    last_x: float = field(init=False)
    current_start: CalendarPoint = field(init=False)
    current_end: CalendarPoint = field(init=False)
    current_progress: int = field(init=False)
    revision: int = 0  # bumped on each preview change

    def __post_init__(self) -> None:
        grabbed = self.grabbed
        self.last_x = self.origin_x
        self.current_start = grabbed.start
        self.current_end = grabbed.end
        self.current_progress = grabbed.progress

    @property
    def grabbed(self) -> ItemSnapshot:
        return self.snapshots[self.item_id]

    @property
    def is_bulk(self) -> bool:
        return len(self.snapshots) > 1


class DragController:
    """Pointer-driven move / resize / progress editing for timeline items.

    The host forwards pointer events; results come back through callbacks:

        on_commit(items)              updated records, in snapshot order
        on_select(item_id)            a click that did not edit anything
        on_toggle_selection(id, multi, range)
                                      modifier click, no drag started
        on_preview(session)           live values changed
        on_attach() / on_detach()     global listener lifetime
    """

    def __init__(
        self,
        calendar: WorkdayCalendar,
        granularity: Granularity = DAY,
        pixels_per_day: float = DEFAULT_PIXELS_PER_DAY,
        *,
        timeline_start: date | None = None,
        threshold: float = DEFAULT_THRESHOLD_PX,
        on_commit: Callable[[list[Item]], Any] | None = None,
        on_select: Callable[[str], Any] | None = None,
        on_toggle_selection: Callable[[str, bool, bool], Any] | None = None,
        on_preview: Callable[[DragSession], Any] | None = None,
        on_attach: Callable[[], Any] | None = None,
        on_detach: Callable[[], Any] | None = None,
    ) -> None:
        self.calendar = calendar
        self.granularity = granularity
        self.pixels_per_day = pixels_per_day
        self.timeline_start = timeline_start
        self.threshold = threshold
        self.on_commit = on_commit
        self.on_select = on_select
        self.on_toggle_selection = on_toggle_selection
        self.on_preview = on_preview
        self.on_attach = on_attach
        self.on_detach = on_detach
        self._session: DragSession | None = None

    @property
    def session(self) -> DragSession | None:
        return self._session

    @property
    def state(self) -> DragState:
        return self._session.state if self._session is not None else DragState.IDLE

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def pointer_down(
        self,
        items: Sequence[Item],
        item_id: str,
        mode: DragMode | str,
        x: float,
        selection: Collection[str] = (),
        modifiers: Modifiers = Modifiers(),
        bar: BarGeometry | None = None,
    ) -> bool:
        """Start a gesture on `item_id`. Returns True if a session began.

        A modifier click toggles selection instead of dragging. Grabbing a
        selected item in move mode drags the whole selection, in the order
        the items appear in `items`.
        """
        mode = DragMode(mode)

        if modifiers.any:
            self._notify(
                self.on_toggle_selection, item_id, modifiers.multi, modifiers.range
            )
            return False

        grabbed = next((item for item in items if item.id == item_id), None)
        if grabbed is None:
            logger.warning("Pointer down on unknown item %r ignored", item_id)
            return False

        if self._session is not None:
            logger.warning(
                "Discarding stale drag session on %r", self._session.item_id
            )
            self._teardown()

        if grabbed.is_milestone and mode in (DragMode.RESIZE_LEFT, DragMode.RESIZE_RIGHT):
            mode = DragMode.MOVE

        if mode is DragMode.MOVE and item_id in selection:
            targets = [item for item in items if item.id in selection]
        else:
            targets = [grabbed]

        if mode is DragMode.CHANGE_PROGRESS and bar is None:
            bar = self._bar_for(grabbed)

        self._session = DragSession(
            item_id=item_id,
            mode=mode,
            origin_x=x,
            snapshots={item.id: self._snapshot(item) for item in targets},
            bar=bar,
        )
        logger.debug(
            "Drag %s armed on %r with %d item(s)", mode.value, item_id, len(targets)
        )
        self._notify(self.on_attach)
        return True

    def pointer_move(self, x: float) -> bool:
        """Track the pointer. Returns True when the live values changed."""
        session = self._session
        if session is None:
            return False

        session.last_x = x
        if session.state is DragState.ARMED:
            if not self._past_threshold(session, x):
                return False
            session.state = DragState.DRAGGING

        changed = self._track(session, x)
        if changed:
            session.revision += 1
            self._notify(self.on_preview, session)
        return changed

    def pointer_up(self, x: float | None = None) -> list[Item]:
        """Finish the gesture and return the committed records (maybe empty)."""
        session = self._session
        if session is None:
            return []

        if x is not None:
            session.last_x = x

        try:
            updates = self._resolve(session)
        finally:
            self._teardown()

        if updates:
            logger.debug(
                "Drag %s on %r committed %d item(s)",
                session.mode.value, session.item_id, len(updates),
            )
            self._notify(self.on_commit, updates)
        return updates

    def cancel(self) -> None:
        """Abandon the active gesture. Nothing is emitted."""
        if self._session is None:
            return
        logger.debug("Drag on %r cancelled", self._session.item_id)
        self._teardown()

    def preview(self) -> dict[str, Item]:
        """Live records for every item in the session, keyed by id."""
        if self._session is None:
            return {}
        return self._derive(self._session)

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def _snapshot(self, item: Item) -> ItemSnapshot:
        span = item.span
        if span is None:
            span = self.calendar.workday_span(item.start, item.end)
        return ItemSnapshot(item=item, span=span)

    def _bar_for(self, item: Item) -> BarGeometry | None:
        if self.timeline_start is None:
            logger.warning(
                "No bar geometry for %r; progress drag will not change it", item.id
            )
            return None
        return BarGeometry.for_item(item, self.timeline_start, self.pixels_per_day)

    def _past_threshold(self, session: DragSession, x: float) -> bool:
        return abs(x - session.origin_x) > self.threshold

    def _shift(
        self, snapshot: ItemSnapshot, delta_days: float
    ) -> tuple[CalendarPoint, CalendarPoint]:
        """Move an item by a day offset, keeping its own working-day span."""
        start = self.granularity.step(snapshot.start, delta_days)
        if snapshot.item.is_milestone:
            pinned = CalendarPoint(start.date, Timing.AM)
            return pinned, pinned
        if snapshot.span:
            return start, self.calendar.project_end(start, snapshot.span)
        return start, self.granularity.step(snapshot.end, delta_days)

    def _endpoints(
        self, session: DragSession, delta_days: float
    ) -> tuple[CalendarPoint, CalendarPoint]:
        grabbed = session.grabbed
        if session.mode is DragMode.MOVE:
            return self._shift(grabbed, delta_days)
        if session.mode is DragMode.RESIZE_LEFT:
            start = self.granularity.step(grabbed.start, delta_days)
            return min(start, grabbed.end), grabbed.end
        end = self.granularity.step(grabbed.end, delta_days)
        return grabbed.start, max(end, grabbed.start)

    def _track(self, session: DragSession, x: float) -> bool:
        if session.mode is DragMode.CHANGE_PROGRESS:
            if session.bar is None:
                return False
            progress = session.bar.progress_at(x)
            if progress == session.current_progress:
                return False
            session.current_progress = progress
            return True

        delta_days = (x - session.origin_x) / self.pixels_per_day
        start, end = self._endpoints(session, delta_days)
        if start == session.current_start and end == session.current_end:
            return False
        session.current_start = start
        session.current_end = end
        return True

    def _derive(self, session: DragSession) -> dict[str, Item]:
        grabbed = session.grabbed

        if session.mode is DragMode.CHANGE_PROGRESS:
            return {
                session.item_id: grabbed.item.with_progress(session.current_progress)
            }

        if session.mode is DragMode.MOVE:
            # One aggregate offset, taken from the grabbed item, for every item
            delta = day_delta(grabbed.start, session.current_start)
            return {
                item_id: snapshot.item.with_dates(*self._shift(snapshot, delta))
                for item_id, snapshot in session.snapshots.items()
            }

        start, end = session.current_start, session.current_end
        return {
            session.item_id: grabbed.item.with_dates(
                start, end, span=self.calendar.workday_span(start, end)
            )
        }

    def _resolve(self, session: DragSession) -> list[Item]:
        """Committed records for the final pointer position.

        The threshold only gates live previews. Whether the gesture edited
        anything is decided here from the resolved values alone, so a short
        drag on a compressed scale still commits once it crosses a day.
        """
        grabbed = session.grabbed
        self._track(session, session.last_x)

        if session.mode is DragMode.MOVE:
            if session.current_start == grabbed.start:
                self._notify(self.on_select, session.item_id)
                return []
        elif session.mode is DragMode.RESIZE_LEFT:
            if session.current_start == grabbed.start:
                return []
        elif session.mode is DragMode.RESIZE_RIGHT:
            if session.current_end == grabbed.end:
                return []
        elif session.current_progress == grabbed.progress:
            return []

        return list(self._derive(session).values())

    def _teardown(self) -> None:
        self._session = None
        self._notify(self.on_detach)

    @staticmethod
    def _notify(callback: Callable[..., Any] | None, *args: Any) -> None:
        if callback is not None:
            callback(*args)
