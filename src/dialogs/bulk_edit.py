"""Bulk-edit dialog state.

Collects a partial patch for the selected rows. Only fields the user filled
in end up in the patch; every other column is left untouched on every row.
The dialog never talks to the backend: ``confirm()`` hands the patch to the
owner, which performs the write and closes the dialog on success.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.errors import DialogBusyError
from src.grid.models import Row
from src.utils.formatting import parse_date, parse_decimal

FIELD_KINDS = ("text", "select", "date", "textarea", "number")


@dataclass(frozen=True)
class BulkEditField:
    """One input of the bulk-edit form."""

    key: str
    label: str
    kind: str = "text"
    options: Tuple[Tuple[str, str], ...] = ()
    placeholder: Optional[str] = None

    def __post_init__(self):
        if self.kind not in FIELD_KINDS:
            raise ValueError(f"Unsupported field kind: {self.kind}")
        if not isinstance(self.options, tuple):
            object.__setattr__(self, "options", tuple(tuple(o) for o in self.options))

    @property
    def hint(self) -> str:
        """Placeholder shown in the empty input."""
        return self.placeholder or f"{self.label}..."

    def normalize(self, value: Any) -> Any:
        """
        Convert a widget value to the form stored in the patch.

        Dates become ISO ``YYYY-MM-DD`` strings and numbers ``Decimal``.
        Blank or unparseable input becomes None, i.e. untouched.
        """
        if value is None:
            return None
        if isinstance(value, str) and value.strip() == "":
            return None
        if self.kind == "date":
            parsed = parse_date(value)
            return parsed.isoformat() if parsed is not None else None
        if self.kind == "number":
            return parse_decimal(value)
        return value


@dataclass
class BulkPatch:
    """Fields to set on every selected row; absent keys mean 'leave as is'."""

    values: Dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, key: str) -> bool:
        return key in self.values

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.values)


class BulkEditDialog:
    """
    Form state of the bulk-edit dialog.

    Usage:
        dialog = BulkEditDialog(fields, selected_rows, on_save=controller.bulk_update)
        dialog.set_field("forma_pagto", "pix")
        dialog.confirm()  # on_save(BulkPatch({"forma_pagto": "pix"}))
    """

    def __init__(
        self,
        fields: Iterable[BulkEditField],
        selected_items: Sequence[Row],
        on_save: Optional[Callable[[BulkPatch], Any]] = None,
        is_loading: bool = False,
    ):
        self.fields: List[BulkEditField] = list(fields)
        self.selected_items: List[Row] = list(selected_items)
        self.on_save = on_save
        self.is_loading = is_loading
        self._values: Dict[str, Any] = {}

    def get_field(self, key: str) -> BulkEditField:
        for f in self.fields:
            if f.key == key:
                return f
        raise KeyError(key)

    def set_field(self, key: str, value: Any) -> None:
        """Record the value typed into field ``key``."""
        self._values[key] = self.get_field(key).normalize(value)

    def get_value(self, key: str) -> Any:
        return self._values.get(key)

    def clear(self) -> None:
        """Reset every field to empty without closing the dialog."""
        self._values = {}

    def patch(self) -> BulkPatch:
        """Only the fields holding a value, in field order."""
        values = {}
        for f in self.fields:
            value = self._values.get(f.key)
            if value is not None and value != "":
                values[f.key] = value
        return BulkPatch(values)

    @property
    def can_submit(self) -> bool:
        return not self.is_loading

    @property
    def title(self) -> str:
        return "Edição em Massa"

    @property
    def description(self) -> str:
        return (
            f"{len(self.selected_items)} parcela(s) selecionada(s). "
            "Apenas os campos preenchidos serão atualizados."
        )

    @property
    def submit_label(self) -> str:
        if self.is_loading:
            return "Atualizando..."
        return f"Atualizar {len(self.selected_items)} Parcela(s)"

    def confirm(self) -> BulkPatch:
        """
        Emit the patch to the owner.

        Returns:
            The emitted patch

        Raises:
            DialogBusyError: If the owner is still processing a previous save
        """
        if self.is_loading:
            raise DialogBusyError("Bulk edit is still being saved")
        result = self.patch()
        if self.on_save is not None:
            self.on_save(result)
        return result


def field_value_for_widget(dialog_field: BulkEditField, value: Any) -> Any:
    """Stored patch value converted back to what the input widget expects."""
    if value is None:
        return None
    if dialog_field.kind == "date" and isinstance(value, str):
        return parse_date(value)
    if dialog_field.kind == "number":
        return float(value)
    return value
