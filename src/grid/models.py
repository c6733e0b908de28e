"""Descriptors for the generic data grid.

Rows are plain dictionaries keyed by column name with an ``id`` field. Column
and filter descriptors are supplied once by the owning page; the mutable UI
state (column visibility, filter values, selection) lives in the table view.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Union

Row = Dict[str, Any]

DateLike = Union[date, datetime, str]


def row_id(row: Row) -> str:
    """Identifier of a row as used by the selection set."""
    return str(row.get("id"))


class FilterKind(Enum):
    """Comparison semantics of a per-column filter."""
    TEXT = "text"
    SELECT = "select"
    DATE = "date"
    BOOLEAN = "boolean"
    NUMBER = "number"
    DATE_RANGE = "date-range"


class Align(Enum):
    """Cell alignment."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar range; either bound may be missing."""

    start: Optional[DateLike] = None
    end: Optional[DateLike] = None

    @property
    def is_complete(self) -> bool:
        """Both bounds present."""
        return self.start not in (None, "") and self.end not in (None, "")

    @property
    def is_empty(self) -> bool:
        """Neither bound present."""
        return self.start in (None, "") and self.end in (None, "")

    def __str__(self) -> str:
        start = self.start if self.start not in (None, "") else "..."
        end = self.end if self.end not in (None, "") else "..."
        return f"{start} a {end}"


@dataclass(frozen=True)
class ColumnDescriptor:
    """A column of the grid: which row field it reads and how to show it."""

    key: str
    title: str
    renderer: Optional[Callable[[Row], Any]] = None
    sortable: bool = False
    filterable: bool = False
    # Streamlit column size: "small", "medium" or "large"
    width: Optional[str] = None
    align: Align = Align.LEFT

    def render(self, row: Row) -> Any:
        """Cell content for ``row``."""
        if self.renderer is not None:
            return self.renderer(row)
        return row.get(self.key)


@dataclass(frozen=True)
class FilterDescriptor:
    """A per-column filter: its kind decides how ``value`` is compared."""

    key: str
    label: str
    kind: FilterKind = FilterKind.TEXT
    options: Tuple[Tuple[str, str], ...] = ()
    value: Any = None
    default_value: Any = None

    def __post_init__(self):
        if isinstance(self.kind, str):
            object.__setattr__(self, "kind", FilterKind(self.kind))
        if not isinstance(self.options, tuple):
            object.__setattr__(self, "options", tuple(tuple(o) for o in self.options))

    @property
    def is_active(self) -> bool:
        """True when the filter narrows the rows."""
        return not is_empty_value(self.value)

    def with_value(self, value: Any) -> "FilterDescriptor":
        """Copy of this descriptor holding ``value``."""
        return replace(self, value=value)

    def option_label(self, value: Any) -> str:
        """Label of the option whose value is ``value``."""
        for option_value, label in self.options:
            if option_value == value or str(option_value) == str(value):
                return label
        return str(value)

    def display_value(self) -> str:
        """Human readable form of the current value (used by chips)."""
        if self.options:
            return self.option_label(self.value)
        if isinstance(self.value, bool):
            return "Sim" if self.value else "Não"
        if isinstance(self.value, (date, datetime)):
            return self.value.strftime("%d/%m/%Y")
        return str(self.value)


@dataclass
class FilterChip:
    """A removable badge for one active filter."""
    key: str
    label: str
    display: str

    @property
    def text(self) -> str:
        return f"{self.label}: {self.display}"


def is_empty_value(value: Any) -> bool:
    """Filter value that means 'no filter'.

    ``False`` and ``0`` are real values; only missing, blank and empty
    containers count as empty.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    if isinstance(value, DateRange):
        return value.is_empty
    return False


@dataclass
class BulkAction:
    """A caller-supplied action of the bulk-action bar."""

    key: str
    label: str
    handler: Callable[[list], Any]
    destructive: bool = False


@dataclass
class TableRender:
    """Renderable snapshot of a table view."""

    loading: bool
    headers: list = field(default_factory=list)
    alignments: list = field(default_factory=list)
    rows: list = field(default_factory=list)
    empty_message: Optional[str] = None
    colspan: int = 0
    summary: str = ""
    chips: list = field(default_factory=list)
    bulk_bar_visible: bool = False
    selected_count: int = 0
    all_selected: bool = False
