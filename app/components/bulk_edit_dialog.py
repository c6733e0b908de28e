"""Modal for the bulk-edit dialog."""

from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.dialogs.bulk_edit import BulkEditDialog, BulkEditField, field_value_for_widget
from app.components.notifications import render_notifications


def _field_input(dialog: BulkEditDialog, field: BulkEditField, key: str):
    current = field_value_for_widget(field, dialog.get_value(field.key))

    if field.kind == "select":
        values = [None] + [value for value, _ in field.options]
        labels = dict(field.options)
        return st.selectbox(
            field.label,
            options=values,
            index=values.index(current) if current in values else 0,
            format_func=lambda v: "Não alterar" if v is None else labels.get(v, v),
            key=key,
        )
    if field.kind == "date":
        return st.date_input(field.label, value=current, format="DD/MM/YYYY", key=key)
    if field.kind == "number":
        return st.number_input(field.label, value=current, step=0.01, key=key)
    if field.kind == "textarea":
        return st.text_area(field.label, value=current or "", placeholder=field.hint, height=90, key=key)
    return st.text_input(field.label, value=current or "", placeholder=field.hint, key=key)


@st.dialog("Edição em Massa", width="large")
def render_bulk_edit_dialog(dialog: BulkEditDialog, controller, key_prefix: str = "bulk_edit") -> None:
    """
    Draw the bulk-edit form; confirm hands the patch to the controller.

    Args:
        dialog: Dialog state created by the controller.
        controller: Owner whose notifications are shown on failure.
        key_prefix: Unique prefix for widget keys.
    """
    st.caption(dialog.description)
    generation = st.session_state.setdefault(f"{key_prefix}_gen", 0)

    cols = st.columns(2)
    for i, field in enumerate(dialog.fields):
        with cols[i % 2]:
            value = _field_input(dialog, field, f"{key_prefix}_{field.key}_{generation}")
        dialog.set_field(field.key, value)

    render_notifications(controller.pop_notifications())

    clear_col, cancel_col, submit_col = st.columns(3)
    if clear_col.button("Limpar", key=f"{key_prefix}_clear"):
        dialog.clear()
        st.session_state[f"{key_prefix}_gen"] = generation + 1
        st.rerun(scope="fragment")
    if cancel_col.button("Cancelar", key=f"{key_prefix}_cancel"):
        st.rerun()
    if submit_col.button(
        dialog.submit_label,
        key=f"{key_prefix}_submit",
        type="primary",
        disabled=not dialog.can_submit,
    ):
        dialog.confirm()
        # The controller drops the dialog once the write succeeded
        if controller.bulk_edit_dialog is None:
            st.rerun()
        st.rerun(scope="fragment")
