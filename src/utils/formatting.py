"""NULL-aware parsing and display utilities.

Shared by the filter engine (string forms, date and number coercion), the
dialogs (money parsing) and the column renderers (currency and date display).
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from pathlib import Path
import re
import sys

import pandas as pd

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.constants import DATE_FORMATS, DISPLAY_DATE_FORMAT, NULL_DISPLAY

# 1.234,56 / 1.234.567 / 1234,5: dots only as thousands groups before the comma
BRAZILIAN_NUMBER = re.compile(r"^[+-]?(\d{1,3}(\.\d{3})+|\d+)(,\d+)?$")


def is_null(value: Any) -> bool:
    """Check for None, NaN/NaT and blank strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (float, pd.Timestamp)) or value is pd.NaT:
        return bool(pd.isna(value))
    return False


def to_text(value: Any) -> str:
    """
    String form of a cell value as used by search and text filters.

    None renders empty, booleans as true/false, integral floats without the
    decimal part, and nested mappings or lists as their values joined by
    spaces.
    """
    if is_null(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, Decimal):
        return str(int(value)) if value == value.to_integral_value() else str(value)
    if isinstance(value, dict):
        return " ".join(to_text(v) for v in value.values())
    if isinstance(value, (list, tuple, set)):
        return " ".join(to_text(v) for v in value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def parse_date(value: Any) -> Optional[date]:
    """
    Calendar date of a value, or None when it cannot be parsed.

    Accepts date/datetime/Timestamp objects, ISO-8601 strings (with time and a
    trailing Z) and the formats in DATE_FORMATS.
    """
    if is_null(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_decimal(value: Any) -> Optional[Decimal]:
    """
    Decimal form of a numeric value, or None when it is not numeric.

    Strings with a comma or several dots are read in Brazilian notation
    (``1.234,56``); anything else mixing separators, such as ``1,234.56``,
    is rejected. A single dot is a decimal point (``1234.56``).
    """
    if is_null(value) or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        number = Decimal(str(value))
        return number if number.is_finite() else None
    if isinstance(value, str):
        text = value.strip()
        if "," in text or text.count(".") > 1:
            if not BRAZILIAN_NUMBER.match(text):
                return None
            text = text.replace(".", "").replace(",", ".")
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None


def format_nullable(value: Any, default: str = NULL_DISPLAY) -> str:
    """Format a potentially NULL value for display."""
    if is_null(value):
        return default
    return str(value)


def format_currency(value: Any, default: str = NULL_DISPLAY, signed: bool = False) -> str:
    """
    Format an amount as Brazilian reais, e.g. ``R$ 1.234,56``.

    Args:
        value: Numeric value (may be None)
        default: Text for NULL or non-numeric values
        signed: Prefix positive amounts with '+'

    Returns:
        Formatted string
    """
    amount = parse_decimal(value)
    if amount is None:
        return default

    sign = ""
    if amount < 0:
        sign = "-"
    elif signed and amount > 0:
        sign = "+"

    text = f"{abs(amount):,.2f}"
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


def format_date(value: Any, default: str = NULL_DISPLAY, format_str: str = DISPLAY_DATE_FORMAT) -> str:
    """Format a date-like value, e.g. ``18/04/2024``."""
    parsed = parse_date(value)
    if parsed is None:
        return default
    return parsed.strftime(format_str)


def only_digits(value: Optional[str]) -> str:
    """Keep only the digits of a document number (CPF/CNPJ)."""
    if not value:
        return ""
    return "".join(ch for ch in value if ch.isdigit())
