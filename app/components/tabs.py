"""Tab strip bound to a TabState."""

from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.grid.tabs import TabState


def render_tab_list(state: TabState, key: str = "tabs") -> str:
    """
    Draw the tab buttons and activate the clicked one.

    Returns:
        Identifier of the active tab.
    """
    enabled = [tab for tab in state.tabs if not tab.disabled]
    if not enabled:
        return state.active_tab

    ids = [tab.id for tab in enabled]
    titles = {tab.id: tab.title for tab in enabled}
    selected = st.radio(
        "Abas",
        options=ids,
        index=ids.index(state.active_tab) if state.active_tab in ids else 0,
        format_func=lambda tab_id: titles[tab_id],
        horizontal=True,
        label_visibility="collapsed",
        key=key,
    )
    if selected != state.active_tab:
        state.set_active_tab(selected)
    return state.active_tab
