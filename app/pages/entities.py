"""Entities page for FinanceiroLB."""

from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.controllers import EntitiesController
from app.components import render_data_table, render_notifications, render_tab_list
from app.session import get_app_backend, get_controller


def _render_stats(controller: EntitiesController) -> None:
    stats = controller.stats()
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total", stats["total"])
    col2.metric("Ativas", stats["ativas"])
    col3.metric("Pessoas Físicas", stats["fisicas"])
    col4.metric("Pessoas Jurídicas", stats["juridicas"])


def _render_delete(controller: EntitiesController) -> None:
    rows = controller.view.filtered_rows()
    if not rows:
        return

    with st.expander("Excluir entidade"):
        labels = {row["id"]: f"#{row['id']} - {row.get('nome')}" for row in rows}
        entity_id = st.selectbox(
            "Entidade",
            options=list(labels),
            format_func=lambda rid: labels[rid],
            key="entities_delete_target",
        )
        confirmed = st.checkbox("Tenho certeza que desejo excluir esta entidade", key="entities_delete_ok")
        if st.button("Excluir", disabled=not confirmed, key="entities_delete"):
            controller.delete_entity(entity_id)
            st.rerun()


def render_entities():
    """Render the entities page."""
    st.markdown("Gerencie pessoas físicas e jurídicas do sistema")

    try:
        backend = get_app_backend()
    except Exception as e:
        st.error(f"Erro ao conectar ao backend: {e}")
        return

    controller = get_controller("entities_controller", lambda: EntitiesController(backend))
    render_notifications(controller.pop_notifications())

    col1, col2 = st.columns([5, 1])
    with col2:
        if st.button("🔄 Recarregar", key="entities_reload"):
            controller.load()
            st.rerun()

    _render_stats(controller)
    st.divider()

    render_tab_list(controller.tabs, key="entities_tabs")
    render_data_table(controller.view, key_prefix="entities")
    _render_delete(controller)
