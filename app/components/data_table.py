"""Streamlit rendering of a TableView.

The view object lives in ``st.session_state`` (owned by a page controller);
this module only draws it and feeds widget changes back into it.
"""

import inspect
from typing import Callable, Dict, Optional
from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.grid.models import DateRange, FilterDescriptor, FilterKind
from src.grid.table_view import SELECT_COLUMN, TableView
from src.utils.formatting import parse_date

# Column alignment is only configurable on newer Streamlit releases
COLUMN_ALIGNMENT = "alignment" in inspect.signature(st.column_config.Column).parameters


def _generation(key: str) -> int:
    """Counter appended to widget keys so a reset recreates the widgets."""
    return st.session_state.setdefault(f"{key}_gen", 0)


def _bump(key: str) -> None:
    st.session_state[f"{key}_gen"] = _generation(key) + 1


def render_data_table(
    view: TableView,
    key_prefix: str = "table",
    on_action: Optional[Callable[[str], None]] = None,
) -> None:
    """
    Render search box, filter row, chips, bulk bar, table and summary.

    Args:
        view: Table view to render.
        key_prefix: Unique prefix for widget keys.
        on_action: Called with the bulk action key after the action ran.
    """
    _render_toolbar(view, key_prefix)
    if view.filters:
        _render_filter_row(view, key_prefix)
    _render_chips(view, key_prefix)
    if view.bulk_bar_visible:
        _render_bulk_bar(view, key_prefix, on_action)

    snapshot = view.render()
    if snapshot.loading:
        st.info("Carregando...")
        return

    _render_grid(view, key_prefix)
    st.caption(snapshot.summary)


def _render_toolbar(view: TableView, key_prefix: str) -> None:
    col1, col2 = st.columns([4, 1])

    with col1:
        if view.searchable:
            query = st.text_input(
                "Buscar",
                value=view.search_query,
                placeholder=view.search_placeholder,
                label_visibility="collapsed",
                key=f"{key_prefix}_search_{_generation(key_prefix + '_filters')}",
            )
            if query != view.search_query:
                view.set_search(query)

    with col2:
        with st.popover("Colunas"):
            for column in view.columns:
                visible = st.checkbox(
                    column.title,
                    value=view.is_column_visible(column.key),
                    key=f"{key_prefix}_col_{column.key}",
                )
                if visible != view.is_column_visible(column.key):
                    view.toggle_column(column.key, visible)


def _filter_widget(descriptor: FilterDescriptor, key: str):
    """Draw the input for one filter and return its value."""
    kind = descriptor.kind

    if kind == FilterKind.SELECT:
        values = [None] + [value for value, _ in descriptor.options]
        current = descriptor.value if descriptor.value in values else None
        return st.selectbox(
            descriptor.label,
            options=values,
            index=values.index(current),
            format_func=lambda v: "Todos" if v is None else descriptor.option_label(v),
            key=key,
        )

    if kind == FilterKind.BOOLEAN:
        values = [None, True, False]
        current = descriptor.value if descriptor.value in values else None
        return st.selectbox(
            descriptor.label,
            options=values,
            index=values.index(current),
            format_func=lambda v: {None: "Todos", True: "Sim", False: "Não"}[v],
            key=key,
        )

    if kind == FilterKind.DATE:
        return st.date_input(
            descriptor.label,
            value=parse_date(descriptor.value),
            format="DD/MM/YYYY",
            key=key,
        )

    if kind == FilterKind.DATE_RANGE:
        current = descriptor.value if isinstance(descriptor.value, DateRange) else DateRange()
        bounds = tuple(parse_date(b) for b in (current.start, current.end) if b)
        selected = st.date_input(descriptor.label, value=bounds, format="DD/MM/YYYY", key=key)
        selected = tuple(selected) if isinstance(selected, (tuple, list)) else (selected,)
        if not selected or selected[0] is None:
            return None
        return DateRange(selected[0], selected[1] if len(selected) > 1 else None)

    # text and number
    return st.text_input(descriptor.label, value=descriptor.value or "", key=key)


def _render_filter_row(view: TableView, key_prefix: str) -> None:
    generation = _generation(key_prefix + "_filters")
    filters = view.filter_controls()
    cols = st.columns(len(filters))
    for col, descriptor in zip(cols, filters):
        with col:
            value = _filter_widget(descriptor, f"{key_prefix}_f_{descriptor.key}_{generation}")
        if value != descriptor.value and not (value in ("", None) and descriptor.value in ("", None)):
            view.update_filter(descriptor.key, value)


def _render_chips(view: TableView, key_prefix: str) -> None:
    chips = view.active_chips()
    if not chips and not view.search_query:
        return

    cols = st.columns(len(chips) + 1)
    for col, chip in zip(cols, chips):
        with col:
            if st.button(f"{chip.text} ✕", key=f"{key_prefix}_chip_{chip.key}"):
                view.remove_chip(chip.key)
                _bump(key_prefix + "_filters")
                st.rerun()
    with cols[-1]:
        if st.button("Limpar filtros", key=f"{key_prefix}_clear"):
            view.clear_all_filters()
            _bump(key_prefix + "_filters")
            st.rerun()


def _render_bulk_bar(
    view: TableView,
    key_prefix: str,
    on_action: Optional[Callable[[str], None]],
) -> None:
    pending_key = f"{key_prefix}_pending_action"
    count = view.selection.count

    with st.container(border=True):
        cols = st.columns(len(view.bulk_actions) + 2)
        cols[0].markdown(f"**{count} item(s) selecionado(s)**")
        for col, action in zip(cols[1:], view.bulk_actions):
            if col.button(action.label, key=f"{key_prefix}_bulk_{action.key}"):
                if action.destructive:
                    st.session_state[pending_key] = action.key
                else:
                    view.invoke_bulk_action(action.key)
                    if on_action is not None:
                        on_action(action.key)
        if cols[-1].button("Limpar seleção", key=f"{key_prefix}_dismiss"):
            view.dismiss_bulk_bar()
            _bump(key_prefix + "_grid")
            st.rerun()

        pending = st.session_state.get(pending_key)
        if pending:
            st.warning(f"Deseja realmente excluir {count} item(s)?")
            confirm_col, cancel_col = st.columns(2)
            if confirm_col.button("Confirmar", key=f"{key_prefix}_confirm", type="primary"):
                st.session_state[pending_key] = None
                view.invoke_bulk_action(pending)
                if on_action is not None:
                    on_action(pending)
                _bump(key_prefix + "_grid")
                st.rerun()
            if cancel_col.button("Cancelar", key=f"{key_prefix}_cancel"):
                st.session_state[pending_key] = None
                st.rerun()


def _column_config(view: TableView) -> Dict[str, object]:
    """Streamlit column settings from the declared widths and alignments."""
    widths = view.column_widths()
    alignments = view.column_alignments() if COLUMN_ALIGNMENT else {}
    config = {}
    for title in dict.fromkeys([*widths, *alignments]):
        settings = {"width": widths.get(title)}
        if title in alignments:
            settings["alignment"] = alignments[title]
        config[title] = st.column_config.Column(**settings)
    return config


def _render_grid(view: TableView, key_prefix: str) -> None:
    df = view.to_dataframe()
    if df.empty:
        st.info(view.empty_message)
        return

    column_config = _column_config(view)

    if not view.selectable:
        st.dataframe(df, column_config=column_config, use_container_width=True, hide_index=True)
        return

    col1, col2 = st.columns([1, 1])
    with col1:
        all_selected = st.checkbox(
            "Selecionar todos",
            value=view.selection.is_all_selected,
            key=f"{key_prefix}_all_{_generation(key_prefix + '_grid')}",
        )
        if all_selected != view.selection.is_all_selected:
            view.toggle_all()
            _bump(key_prefix + "_grid")
            st.rerun()
    with col2:
        range_mode = st.toggle(
            "Selecionar intervalo",
            key=f"{key_prefix}_range",
            help="Marque uma linha e depois outra para selecionar todas entre elas",
        )

    column_config[SELECT_COLUMN] = st.column_config.CheckboxColumn("✓", width="small")
    edited = st.data_editor(
        df,
        column_config=column_config,
        disabled=[c for c in df.columns if c != SELECT_COLUMN],
        hide_index=True,
        use_container_width=True,
        key=f"{key_prefix}_grid_{_generation(key_prefix + '_grid')}",
    )

    changed = {
        rid: bool(edited.at[rid, SELECT_COLUMN]) for rid in df.index
        if bool(edited.at[rid, SELECT_COLUMN]) != bool(df.at[rid, SELECT_COLUMN])
    }
    if changed:
        for rid, checked in changed.items():
            view.set_row_checked(rid, checked, extend=range_mode)
        _bump(key_prefix + "_grid")
        st.rerun()
