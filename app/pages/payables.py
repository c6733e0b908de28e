"""Accounts payable page for FinanceiroLB."""

from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.controllers import InstallmentsController
from app.components import (
    render_bulk_edit_dialog,
    render_data_table,
    render_notifications,
    render_payment_dialog,
)
from app.session import get_app_backend, get_controller


def render_installments(controller: InstallmentsController, key_prefix: str) -> None:
    """Installments table plus the bulk dialogs it opens."""
    render_notifications(controller.pop_notifications())

    col1, col2 = st.columns([5, 1])
    with col2:
        if st.button("🔄 Recarregar", key=f"{key_prefix}_reload"):
            controller.load()
            st.rerun()

    def on_action(action_key: str) -> None:
        if action_key == "edit" and controller.bulk_edit_dialog is not None:
            render_bulk_edit_dialog(controller.bulk_edit_dialog, controller, key_prefix=f"{key_prefix}_be")
        elif action_key == "pay" and controller.payment_dialog is not None:
            render_payment_dialog(controller.payment_dialog, controller, key_prefix=f"{key_prefix}_pay")

    render_data_table(controller.view, key_prefix=key_prefix, on_action=on_action)


def render_payables():
    """Render the accounts payable page."""
    st.markdown("Gerencie suas contas a pagar com seleção múltipla e edição em massa")

    try:
        backend = get_app_backend()
    except Exception as e:
        st.error(f"Erro ao conectar ao backend: {e}")
        return

    controller = get_controller(
        "installments_controller",
        lambda: InstallmentsController(backend),
    )
    render_installments(controller, key_prefix="payables")
