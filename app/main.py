"""
FinanceiroLB - Main Streamlit Application

Run with: streamlit run app/main.py
"""

import streamlit as st
from pathlib import Path
import sys

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from config.logging_config import setup_logging

# Import page modules
from app.pages.entities import render_entities
from app.pages.new_entity import render_new_entity
from app.pages.payables import render_payables
from app.pages.payables_demo import render_payables_demo

PAGES = {
    "Cadastros": ["Entidades", "Nova Entidade"],
    "Financeiro AP": ["Contas a Pagar", "Contas a Pagar (Demo)"],
}


def main():
    """Main application entry point."""
    setup_logging()

    # Page configuration
    st.set_page_config(
        page_title=config.app.name,
        page_icon="💼",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    # Sidebar
    with st.sidebar:
        st.title("💼 FinanceiroLB")
        st.caption(f"v{config.app.version}")

        st.divider()

        section = st.radio("Seção", options=list(PAGES), horizontal=True)
        page = st.radio(
            "Ir para",
            options=PAGES[section],
            label_visibility="collapsed",
        )

        st.divider()

        # Backend status
        st.subheader("Backend")
        if config.backend.use_demo or not config.backend.is_configured:
            st.warning("Modo demonstração")
            st.caption("Defina SUPABASE_URL e SUPABASE_ANON_KEY para usar o backend")
        else:
            st.success("Supabase configurado")
            st.caption(config.backend.url)

    # Main content area
    st.title(page)

    if page == "Entidades":
        render_entities()
    elif page == "Nova Entidade":
        render_new_entity()
    elif page == "Contas a Pagar":
        render_payables()
    elif page == "Contas a Pagar (Demo)":
        render_payables_demo()


if __name__ == "__main__":
    main()
