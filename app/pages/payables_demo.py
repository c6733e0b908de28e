"""Accounts payable demo over sample data."""

from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.controllers import InstallmentsController
from app.pages.payables import render_installments
from app.session import get_controller, get_demo_backend


def render_payables_demo():
    """Render the demo page: same screen, in-memory sample data."""
    st.info(
        "Demonstração com dados de exemplo. Selecione linhas para editar em massa, "
        "registrar pagamentos ou excluir; as alterações ficam apenas nesta sessão."
    )

    controller = get_controller(
        "demo_installments_controller",
        lambda: InstallmentsController(get_demo_backend()),
    )

    if st.button("Restaurar dados de exemplo", key="demo_reset"):
        get_demo_backend().seed()
        controller.load()
        st.rerun()

    render_installments(controller, key_prefix="demo")
