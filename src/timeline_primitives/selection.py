"""Selection: the set of selected items plus the last-clicked anchor.

Range selection walks the *displayed* order supplied by the caller (rows as
currently shown, after grouping or sorting), not storage order, so a shift
click always selects the rows visually between the anchor and the target.
"""

from __future__ import annotations

from typing import Iterator, Sequence


class Selection:
    """Mutable selection state owned by the host view."""

    def __init__(self, ids: Sequence[str] = ()) -> None:
        self._ids: set[str] = set(ids)
        self.anchor: str | None = None

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._ids)

    def toggle(
        self,
        item_id: str,
        multi: bool,
        range_: bool,
        order: Sequence[str] = (),
    ) -> None:
        """Apply a modifier click.

        Args:
            item_id: The clicked item.
            multi: Ctrl/Meta held — keep the current selection.
            range_: Shift held — select every row between anchor and item.
            order: Item ids in displayed order, used for range selection.
        """
        selected = set(self._ids) if multi else set()

        if range_ and self.anchor is not None and self.anchor != item_id:
            try:
                low, high = sorted((order.index(self.anchor), order.index(item_id)))
            except ValueError:
                selected.add(item_id)
            else:
                selected.update(order[low:high + 1])
        elif multi:
            if item_id in selected:
                selected.discard(item_id)
            else:
                selected.add(item_id)
        else:
            if item_id not in self._ids:
                selected.add(item_id)

        self._ids = selected
        self.anchor = item_id

    def select(self, item_id: str) -> None:
        """Plain selection: select only `item_id`, or clear if it was selected."""
        self._ids = set() if item_id in self._ids else {item_id}
        self.anchor = item_id

    def add(self, item_id: str) -> None:
        self._ids.add(item_id)
        self.anchor = item_id

    def clear(self) -> None:
        self._ids = set()
        self.anchor = None
