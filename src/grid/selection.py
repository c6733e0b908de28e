"""Multi-row selection over the currently filtered view.

The selection is a set of row identifiers scoped to the last view handed to
``set_view``. When the view changes, identifiers whose rows left it are
dropped, so bulk actions never reach rows the user can no longer see.

Range extension keeps the anchor at the last plain click: clicking B and then
shift-clicking D and later F selects B..F, both ranges measured from B.
"""

from typing import Callable, List, Optional, Sequence, Set
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.grid.models import Row, row_id

SelectionCallback = Callable[[List[Row]], None]


class SelectionController:
    """Tracks selected identifiers and notifies its owner on every change."""

    def __init__(self, on_change: Optional[SelectionCallback] = None):
        self._selected: Set[str] = set()
        self._anchor_index: Optional[int] = None
        self._view: List[Row] = []
        self._callbacks: List[SelectionCallback] = []
        if on_change is not None:
            self._callbacks.append(on_change)

    @property
    def selected_ids(self) -> Set[str]:
        return set(self._selected)

    @property
    def anchor_index(self) -> Optional[int]:
        return self._anchor_index

    @property
    def current_view(self) -> List[Row]:
        return list(self._view)

    @property
    def count(self) -> int:
        return len(self._selected)

    @property
    def is_all_selected(self) -> bool:
        """Header checkbox state."""
        return bool(self._view) and len(self._selected) == len(self._view)

    def on_change(self, callback: SelectionCallback) -> None:
        """Register a callback: fn(resolved_selection)."""
        self._callbacks.append(callback)

    def _notify(self) -> None:
        resolved = self.resolved_selection()
        for callback in self._callbacks:
            callback(resolved)

    def set_view(self, rows: Sequence[Row]) -> None:
        """
        Scope the selection to a new filtered view.

        Identifiers absent from ``rows`` are dropped; the anchor is reset
        because its index referred to the previous view. Owners are notified
        only when the selection actually shrank.
        """
        self._view = list(rows)
        visible = {row_id(r) for r in self._view}
        stale = self._selected - visible
        self._anchor_index = None
        if stale:
            self._selected -= stale
            self._notify()

    def _index_of(self, row: Row, index: Optional[int]) -> Optional[int]:
        rid = row_id(row)
        if index is not None and 0 <= index < len(self._view) and row_id(self._view[index]) == rid:
            return index
        for i, candidate in enumerate(self._view):
            if row_id(candidate) == rid:
                return i
        return None

    def is_selected(self, row: Row) -> bool:
        return row_id(row) in self._selected

    def toggle(self, row: Row, index: Optional[int] = None) -> None:
        """Flip membership of ``row`` and move the anchor to it."""
        position = self._index_of(row, index)
        if position is None:
            return
        rid = row_id(row)
        if rid in self._selected:
            self._selected.discard(rid)
        else:
            self._selected.add(rid)
        self._anchor_index = position
        self._notify()

    def extend_range(self, row: Row, index: Optional[int] = None) -> None:
        """
        Add every row between the anchor and ``row`` (inclusive).

        The anchor does not move. Without an anchor this behaves like a
        plain toggle.
        """
        position = self._index_of(row, index)
        if position is None:
            return
        if self._anchor_index is None or self._anchor_index >= len(self._view):
            self.toggle(row, position)
            return
        low = min(self._anchor_index, position)
        high = max(self._anchor_index, position)
        for candidate in self._view[low:high + 1]:
            self._selected.add(row_id(candidate))
        self._notify()

    def select_all(self) -> None:
        """Select every row of the view, or clear when all are selected."""
        if len(self._selected) == len(self._view):
            self._selected.clear()
        else:
            self._selected = {row_id(r) for r in self._view}
        self._notify()

    def clear(self) -> None:
        """Empty the selection and forget the anchor."""
        self._selected.clear()
        self._anchor_index = None
        self._notify()

    def resolved_selection(self) -> List[Row]:
        """Selected rows in view order."""
        return [r for r in self._view if row_id(r) in self._selected]

    def __repr__(self) -> str:
        return f"SelectionController(selected={len(self._selected)}, view={len(self._view)})"
