"""Generic data grid: filtering, selection and table view state."""

from .models import (
    Align,
    BulkAction,
    ColumnDescriptor,
    DateRange,
    FilterChip,
    FilterDescriptor,
    FilterKind,
    Row,
    TableRender,
    is_empty_value,
    row_id,
)
from .filter_engine import apply_filters, matches_filter, matches_search
from .filter_state import FilterState
from .selection import SelectionController
from .table_view import TableView
from .tabs import TabItem, TabState

__all__ = [
    "Align",
    "BulkAction",
    "ColumnDescriptor",
    "DateRange",
    "FilterChip",
    "FilterDescriptor",
    "FilterKind",
    "Row",
    "TableRender",
    "is_empty_value",
    "row_id",
    "apply_filters",
    "matches_filter",
    "matches_search",
    "FilterState",
    "SelectionController",
    "TableView",
    "TabItem",
    "TabState",
]
