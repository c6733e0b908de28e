"""Client-side search and per-column filtering of row collections.

``apply_filters`` is a pure function: it returns a new list, never mutates the
rows or the filter descriptors, and never raises. Values that cannot be
compared (unparseable numbers or dates) simply do not match.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.grid.models import DateRange, FilterDescriptor, FilterKind, Row, is_empty_value
from src.utils.formatting import parse_date, parse_decimal, to_text

TRUE_STRINGS = {"true", "1", "sim", "s", "yes", "y"}
FALSE_STRINGS = {"false", "0", "nao", "não", "n", "no", ""}


def matches_search(row: Row, query: str) -> bool:
    """True if any field of ``row`` contains ``query`` (case-insensitive)."""
    needle = query.strip().lower()
    if not needle:
        return True
    return any(needle in to_text(value).lower() for value in row.values())


def _to_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
        return True
    return bool(value)


def _match_text(item_value: Any, filter_value: Any) -> bool:
    return to_text(filter_value).lower() in to_text(item_value).lower()


def _match_select(item_value: Any, filter_value: Any) -> bool:
    if item_value == filter_value and type(item_value) is type(filter_value):
        return True
    # Option values are strings; backend values may be ints or booleans
    if item_value is None:
        return False
    return to_text(item_value) == to_text(filter_value)


def _match_boolean(item_value: Any, filter_value: Any) -> bool:
    return _to_bool(item_value) == _to_bool(filter_value)


def _match_number(item_value: Any, filter_value: Any) -> bool:
    item_number = parse_decimal(item_value)
    filter_number = parse_decimal(filter_value)
    if item_number is None or filter_number is None:
        return False
    return item_number == filter_number


def _match_date(item_value: Any, filter_value: Any) -> bool:
    item_date = parse_date(item_value)
    filter_date = parse_date(filter_value)
    if item_date is None or filter_date is None:
        return False
    return item_date == filter_date


def _coerce_range(value: Any) -> DateRange:
    if isinstance(value, DateRange):
        return value
    if isinstance(value, dict):
        return DateRange(value.get("start"), value.get("end"))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return DateRange(value[0], value[1])
    return DateRange()


def _match_date_range(item_value: Any, filter_value: Any) -> bool:
    date_range = _coerce_range(filter_value)
    # A half-open range is intentionally permissive
    if not date_range.is_complete:
        return True
    start = parse_date(date_range.start)
    end = parse_date(date_range.end)
    if start is None or end is None:
        return True
    item_date = parse_date(item_value)
    if item_date is None:
        return False
    return start <= item_date <= end


MATCHERS: Dict[FilterKind, Callable[[Any, Any], bool]] = {
    FilterKind.TEXT: _match_text,
    FilterKind.SELECT: _match_select,
    FilterKind.BOOLEAN: _match_boolean,
    FilterKind.NUMBER: _match_number,
    FilterKind.DATE: _match_date,
    FilterKind.DATE_RANGE: _match_date_range,
}


def matches_filter(row: Row, descriptor: FilterDescriptor) -> bool:
    """True if ``row`` passes one filter. Inactive filters pass everything."""
    if is_empty_value(descriptor.value):
        return True
    matcher = MATCHERS.get(descriptor.kind)
    if matcher is None:
        return True
    try:
        return matcher(row.get(descriptor.key), descriptor.value)
    except (TypeError, ValueError, ArithmeticError):
        return False


def apply_filters(
    rows: Iterable[Row],
    query: Optional[str] = "",
    filters: Iterable[FilterDescriptor] = (),
) -> List[Row]:
    """
    Apply a search string and per-column filters to rows.

    Args:
        rows: Row collection (not modified).
        query: Free-text search; blank means no search.
        filters: Filter descriptors; those with an empty value are skipped.
            Filters compose with logical AND.

    Returns:
        New list with the matching rows, in input order.
    """
    active = [f for f in filters if not is_empty_value(f.value)]
    query = (query or "").strip()

    result = []
    for row in rows:
        if query and not matches_search(row, query):
            continue
        if all(matches_filter(row, f) for f in active):
            result.append(row)
    return result
