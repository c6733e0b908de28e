"""Filter state for list pages.

Holds the search query and the current value of every configured filter, and
applies them to a row collection through the filter engine.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.errors import UnknownFilterError
from src.grid.filter_engine import apply_filters
from src.grid.models import DateRange, FilterChip, FilterDescriptor, Row, is_empty_value


@dataclass
class FilterState:
    """Current search query and filter values."""

    configs: List[FilterDescriptor] = field(default_factory=list)
    search_query: str = ""

    def __post_init__(self):
        # Seed values from defaults; a value set on the descriptor wins
        self.configs = [
            c if c.value is not None else c.with_value(c.default_value)
            for c in self.configs
        ]

    @property
    def descriptors(self) -> List[FilterDescriptor]:
        """Filter descriptors carrying their current values."""
        return list(self.configs)

    @property
    def is_empty(self) -> bool:
        """Check if no search and no filter is active."""
        return not self.search_query.strip() and self.active_filter_count == 0

    @property
    def active_filter_count(self) -> int:
        """Count of filters with a non-empty value."""
        return sum(1 for c in self.configs if c.is_active)

    def _index(self, key: str) -> int:
        for i, config in enumerate(self.configs):
            if config.key == key:
                return i
        raise UnknownFilterError(key)

    def get_filter_config(self, key: str) -> FilterDescriptor:
        """Descriptor of filter ``key``."""
        return self.configs[self._index(key)]

    def get_filter_value(self, key: str) -> Any:
        """Current value of filter ``key``."""
        return self.get_filter_config(key).value

    def is_filter_active(self, key: str) -> bool:
        """Whether filter ``key`` currently narrows the rows."""
        return self.get_filter_config(key).is_active

    def update_filter(self, key: str, value: Any) -> None:
        """Set the value of filter ``key``."""
        index = self._index(key)
        self.configs[index] = self.configs[index].with_value(value)

    def clear_filter(self, key: str) -> None:
        """Reset filter ``key`` to empty."""
        self.update_filter(key, None)

    def clear_all_filters(self) -> None:
        """Reset every filter and the search query."""
        self.configs = [c.with_value(None) for c in self.configs]
        self.search_query = ""

    def set_search(self, query: Optional[str]) -> None:
        """Set the free-text search query."""
        self.search_query = query or ""

    def apply(self, rows: Sequence[Row]) -> List[Row]:
        """Rows matching the search and every active filter."""
        return apply_filters(rows, self.search_query, self.configs)

    def chips(self) -> List[FilterChip]:
        """One chip per active filter, in configuration order."""
        return [
            FilterChip(key=c.key, label=c.label, display=c.display_value())
            for c in self.configs
            if c.is_active
        ]

    def get_summary(self) -> str:
        """Get a human-readable summary of active filters."""
        parts = [chip.text for chip in self.chips()]
        if self.search_query.strip():
            parts.insert(0, f'Busca: "{self.search_query.strip()}"')
        return " | ".join(parts) if parts else "Sem filtros"

    def signature(self) -> tuple:
        """Hashable snapshot of query and values, used as a cache key."""
        return (self.search_query,) + tuple((c.key, repr(c.value)) for c in self.configs)

    def copy(self) -> "FilterState":
        """Create a copy of this filter state."""
        return FilterState(configs=list(self.configs), search_query=self.search_query)

    def to_dict(self) -> Dict[str, Any]:
        """Convert query and active values to a plain dictionary."""
        values = {}
        for c in self.configs:
            if is_empty_value(c.value):
                continue
            values[c.key] = _serialize(c.value)
        return {"search_query": self.search_query, "values": values}

    @classmethod
    def from_dict(cls, configs: Sequence[FilterDescriptor], data: Dict[str, Any]) -> "FilterState":
        """Create a filter state over ``configs`` restored from ``to_dict`` output."""
        state = cls(configs=list(configs))
        state.load_dict(data)
        return state

    def load_dict(self, data: Dict[str, Any]) -> None:
        """Restore query and values from ``to_dict`` output; unknown keys are ignored."""
        self.clear_all_filters()
        self.search_query = data.get("search_query", "")
        keys = {c.key for c in self.configs}
        for key, value in data.get("values", {}).items():
            if key in keys:
                self.update_filter(key, _deserialize(value))


def _serialize(value: Any) -> Any:
    if isinstance(value, DateRange):
        return {"start": _serialize(value.start), "end": _serialize(value.end)}
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _deserialize(value: Any) -> Any:
    if isinstance(value, dict) and set(value) == {"start", "end"}:
        return DateRange(value["start"], value["end"])
    return value
