"""Generic filterable, selectable table view.

Composes the filter state, the selection controller and column visibility
into one object that a page keeps for its lifetime (in Streamlit, in
``st.session_state``) and renders on every rerun through ``render()`` or
``to_dataframe()``.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
from pathlib import Path
import sys

import pandas as pd

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from config.logging_config import get_logger
from src.grid.filter_state import FilterState
from src.grid.models import (
    Align,
    BulkAction,
    ColumnDescriptor,
    FilterChip,
    FilterDescriptor,
    Row,
    TableRender,
    row_id,
)
from src.grid.selection import SelectionCallback, SelectionController
from src.utils.formatting import format_nullable

logger = get_logger("table_view")

SELECT_COLUMN = "_selected"
ACTIONS_TITLE = "Ações"


class TableView:
    """
    Reusable grid over a homogeneous row collection.

    Usage:
        view = TableView(columns, filters, selectable=True,
                         bulk_actions=[BulkAction("edit", "Editar", open_dialog)])
        view.set_rows(rows)
        view.set_search("kyly")
        view.click_row("3")
        view.invoke_bulk_action("edit")
    """

    def __init__(
        self,
        columns: Sequence[ColumnDescriptor],
        filters: Iterable[FilterDescriptor] = (),
        selectable: bool = False,
        bulk_actions: Iterable[BulkAction] = (),
        row_actions: Optional[Callable[[Row], Any]] = None,
        searchable: bool = True,
        search_placeholder: Optional[str] = None,
        empty_message: Optional[str] = None,
        on_selection_change: Optional[SelectionCallback] = None,
        on_filters_change: Optional[Callable[[List[FilterDescriptor]], None]] = None,
    ):
        """
        Initialize the table view.

        Args:
            columns: Column descriptors, in display order.
            filters: Filter descriptors shown in the filter row.
            selectable: Show the selection column and bulk-action bar.
            bulk_actions: Actions offered while rows are selected.
            row_actions: Optional per-row actions renderer (adds a column).
            searchable: Show the search box.
            search_placeholder: Search box placeholder text.
            empty_message: Placeholder shown when no row matches.
            on_selection_change: Called with the selected rows on every change.
            on_filters_change: Called with the descriptors after a filter edit.
        """
        self.columns = list(columns)
        self.filter_state = FilterState(configs=list(filters))
        self.selectable = selectable
        self.bulk_actions = list(bulk_actions)
        self.row_actions = row_actions
        self.searchable = searchable
        self.search_placeholder = search_placeholder or config.app.search_placeholder
        self.empty_message = empty_message or config.app.empty_message
        self.on_filters_change = on_filters_change

        self.selection = SelectionController(on_selection_change)
        self._visible = {c.key: True for c in self.columns}
        self._rows: List[Row] = []
        self._loading = False
        self._cache_key: Optional[tuple] = None
        self._cache: List[Row] = []

    # ------------------------------------------------------------------
    # Data and loading state
    # ------------------------------------------------------------------

    @property
    def rows(self) -> List[Row]:
        return self._rows

    @property
    def loading(self) -> bool:
        return self._loading

    def set_rows(self, rows: Sequence[Row]) -> None:
        """Replace the row collection (e.g. after a reload)."""
        self._rows = list(rows)
        self._refresh_view()

    def set_loading(self, loading: bool) -> None:
        """Toggle the loading placeholder; filters and search are kept."""
        self._loading = loading

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    @property
    def search_query(self) -> str:
        return self.filter_state.search_query

    @property
    def filters(self) -> List[FilterDescriptor]:
        return self.filter_state.descriptors

    def filtered_rows(self) -> List[Row]:
        """Rows matching search and filters, memoized on rows and filter values."""
        key = (id(self._rows), len(self._rows)) + self.filter_state.signature()
        if key != self._cache_key:
            self._cache = self.filter_state.apply(self._rows)
            self._cache_key = key
        return self._cache

    def _refresh_view(self) -> None:
        previous = self._cache_key
        view = self.filtered_rows()
        if self._cache_key != previous:
            self.selection.set_view(view)

    def set_search(self, query: Optional[str]) -> None:
        """Bind the search box value."""
        self.filter_state.set_search(query)
        self._refresh_view()

    def update_filter(self, key: str, value: Any) -> None:
        """Commit a value from the filter row."""
        self.filter_state.update_filter(key, value)
        self._refresh_view()
        if self.on_filters_change is not None:
            self.on_filters_change(self.filter_state.descriptors)

    def filter_controls(self) -> List[FilterDescriptor]:
        """Descriptors for the filter row, one widget each."""
        return self.filter_state.descriptors

    def active_chips(self) -> List[FilterChip]:
        """One removable chip per filter with a value."""
        return self.filter_state.chips()

    def remove_chip(self, key: str) -> None:
        """Reset the filter behind a chip."""
        self.update_filter(key, None)

    def clear_all_filters(self) -> None:
        """Reset every filter and the search query."""
        self.filter_state.clear_all_filters()
        self._refresh_view()
        if self.on_filters_change is not None:
            self.on_filters_change(self.filter_state.descriptors)

    # ------------------------------------------------------------------
    # Column visibility
    # ------------------------------------------------------------------

    def is_column_visible(self, key: str) -> bool:
        return self._visible.get(key, False)

    def toggle_column(self, key: str, visible: Optional[bool] = None) -> None:
        """Show or hide a column; flips when ``visible`` is None."""
        if key not in self._visible:
            return
        self._visible[key] = (not self._visible[key]) if visible is None else visible

    @property
    def visible_columns(self) -> List[ColumnDescriptor]:
        return [c for c in self.columns if self._visible[c.key]]

    def column_widths(self) -> Dict[str, str]:
        """Width of each visible column that declares one, keyed by title."""
        return {c.title: c.width for c in self.visible_columns if c.width}

    def column_alignments(self) -> Dict[str, str]:
        """Alignment of each visible column that is not left-aligned, keyed by title."""
        return {
            c.title: c.align.value for c in self.visible_columns if c.align is not Align.LEFT
        }

    # ------------------------------------------------------------------
    # Selection and bulk actions
    # ------------------------------------------------------------------

    def toggle_all(self) -> None:
        """Header checkbox."""
        self._refresh_view()
        self.selection.select_all()

    def click_row(self, rid: Any, extend: bool = False) -> None:
        """
        Row checkbox or row click.

        Args:
            rid: Identifier of the clicked row.
            extend: True when the click carries the range-extend modifier.
        """
        view = self.filtered_rows()
        for index, row in enumerate(view):
            if row_id(row) == str(rid):
                if extend:
                    self.selection.extend_range(row, index)
                else:
                    self.selection.toggle(row, index)
                return

    def set_row_checked(self, rid: Any, checked: bool, extend: bool = False) -> None:
        """
        Row checkbox moved to ``checked``.

        Only checking a row extends a range; unchecking always toggles the
        single row off.
        """
        view = self.filtered_rows()
        for row in view:
            if row_id(row) == str(rid):
                if self.selection.is_selected(row) == checked:
                    return
                self.click_row(rid, extend=extend and checked)
                return

    def selected_rows(self) -> List[Row]:
        return self.selection.resolved_selection()

    @property
    def bulk_bar_visible(self) -> bool:
        return self.selectable and self.selection.count > 0

    def invoke_bulk_action(self, key: str) -> Any:
        """Run a bulk action with the resolved selection."""
        for action in self.bulk_actions:
            if action.key == key:
                selected = self.selected_rows()
                logger.info(f"Bulk action '{key}' on {len(selected)} row(s)")
                return action.handler(selected)
        raise KeyError(key)

    def dismiss_bulk_bar(self) -> None:
        """Dismiss action of the bulk bar: clears the selection."""
        self.selection.clear()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def summary(self) -> str:
        """Results line, e.g. 'Mostrando 1 de 5 registros para "kyly"'."""
        text = f"Mostrando {len(self.filtered_rows())} de {len(self._rows)} registros"
        if self.search_query:
            text += f' para "{self.search_query}"'
        return text

    @property
    def colspan(self) -> int:
        """Columns spanned by the empty-state placeholder."""
        extra = (1 if self.selectable else 0) + (1 if self.row_actions else 0)
        return len(self.visible_columns) + extra

    def render(self) -> TableRender:
        """Snapshot of everything the UI needs to draw the table."""
        if self._loading:
            return TableRender(loading=True)

        columns = self.visible_columns
        headers = [c.title for c in columns]
        alignments = [c.align.value for c in columns]
        if self.row_actions:
            headers.append(ACTIONS_TITLE)
            alignments.append(Align.LEFT.value)

        view = self.filtered_rows()
        body = []
        for row in view:
            cells = [_display(c.render(row)) for c in columns]
            if self.row_actions:
                cells.append(self.row_actions(row))
            body.append({
                "id": row_id(row),
                "selected": self.selection.is_selected(row),
                "cells": cells,
            })

        return TableRender(
            loading=False,
            headers=headers,
            alignments=alignments,
            rows=body,
            empty_message=self.empty_message if not view else None,
            colspan=self.colspan,
            summary=self.summary(),
            chips=self.active_chips(),
            bulk_bar_visible=self.bulk_bar_visible,
            selected_count=self.selection.count,
            all_selected=self.selection.is_all_selected,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """
        Visible columns of the filtered rows as a DataFrame indexed by row id.

        When selectable, a leading boolean column holds the selection state.
        """
        columns = self.visible_columns
        records = []
        index = []
        for row in self.filtered_rows():
            record: Dict[str, Any] = {}
            if self.selectable:
                record[SELECT_COLUMN] = self.selection.is_selected(row)
            for c in columns:
                record[c.title] = _display(c.render(row))
            records.append(record)
            index.append(row_id(row))

        headers = ([SELECT_COLUMN] if self.selectable else []) + [c.title for c in columns]
        return pd.DataFrame(records, columns=headers, index=pd.Index(index, name="id"))


def _display(value: Any) -> Any:
    # Numbers stay numeric so the dataframe sorts them as numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return format_nullable(value)
