"""Shared parsing and display helpers."""

from .formatting import (
    is_null,
    to_text,
    parse_date,
    parse_decimal,
    format_nullable,
    format_currency,
    format_date,
    only_digits,
)

__all__ = [
    "is_null",
    "to_text",
    "parse_date",
    "parse_decimal",
    "format_nullable",
    "format_currency",
    "format_date",
    "only_digits",
]
