"""Modal for batch payments."""

from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.constants import BANKS, PAYMENT_METHODS
from src.dialogs.payment import PaymentDialog
from src.utils.formatting import format_currency, parse_date
from app.components.notifications import render_notifications


def _select(label: str, mapping: dict, current: str, placeholder: str, key: str) -> str:
    values = [""] + list(mapping)
    return st.selectbox(
        label,
        options=values,
        index=values.index(current) if current in values else 0,
        format_func=lambda v: placeholder if v == "" else mapping[v],
        key=key,
    )


def _render_summary(dialog: PaymentDialog) -> None:
    summary = dialog.summary()
    st.subheader("Resumo do Pagamento")
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Original", format_currency(summary.total_original))
    col2.metric("Total a Pagar", format_currency(summary.total_paid))
    col3.metric(
        "Diferença",
        summary.difference_display,
        delta=summary.adjustment_label,
        delta_color="inverse" if summary.difference > 0 else "normal",
    )


@st.dialog("💰 Pagamento em Lote", width="large")
def render_payment_dialog(dialog: PaymentDialog, controller, key_prefix: str = "payment") -> None:
    """
    Draw the payment summary and one card per installment.

    Args:
        dialog: Dialog state created by the controller.
        controller: Owner whose notifications are shown on failure.
        key_prefix: Unique prefix for widget keys.
    """
    st.caption(dialog.description)

    st.subheader("Contas para Pagamento")
    for index, payment in enumerate(dialog.payments):
        with st.container(border=True):
            st.markdown(f"**{dialog.item_label(index)}**")
            col1, col2, col3, col4 = st.columns(4)
            col1.text_input(
                "Original",
                value=format_currency(payment.original_value),
                disabled=True,
                key=f"{key_prefix}_orig_{payment.id}",
            )
            paid = col2.number_input(
                "Pago *",
                value=float(payment.paid_value),
                step=0.01,
                key=f"{key_prefix}_paid_{payment.id}",
            )
            paid_on = col3.date_input(
                "Data de Pagamento *",
                value=parse_date(payment.payment_date),
                format="DD/MM/YYYY",
                key=f"{key_prefix}_date_{payment.id}",
            )
            identifier = col4.text_input(
                "Identificador",
                value=payment.identifier,
                placeholder="Ex: TED123",
                key=f"{key_prefix}_ident_{payment.id}",
            )

            col1, col2 = st.columns(2)
            with col1:
                method = _select(
                    "Forma de Pagamento", PAYMENT_METHODS, payment.payment_method,
                    "Selecionar forma", f"{key_prefix}_method_{payment.id}",
                )
            with col2:
                bank = _select(
                    "Banco", BANKS, payment.bank,
                    "Selecionar banco", f"{key_prefix}_bank_{payment.id}",
                )
            notes = st.text_input(
                "Observações",
                value=payment.observations,
                key=f"{key_prefix}_obs_{payment.id}",
            )

        dialog.update_payment(payment.id, "paid_value", paid)
        if paid_on is not None and paid_on != parse_date(payment.payment_date):
            dialog.update_payment(payment.id, "payment_date", paid_on)
        dialog.update_payment(payment.id, "identifier", identifier)
        dialog.update_payment(payment.id, "payment_method", method)
        dialog.update_payment(payment.id, "bank", bank)
        dialog.update_payment(payment.id, "observations", notes)

    dialog.global_observations = st.text_area(
        "Observações Gerais",
        value=dialog.global_observations,
        placeholder="Ex: Pagamento via PIX, desconto por antecipação, juros por atraso, etc.",
        height=90,
        key=f"{key_prefix}_global_obs",
    )

    _render_summary(dialog)
    render_notifications(controller.pop_notifications())

    cancel_col, submit_col = st.columns(2)
    if cancel_col.button("Cancelar", key=f"{key_prefix}_cancel"):
        st.rerun()
    if submit_col.button(
        dialog.submit_label,
        key=f"{key_prefix}_submit",
        type="primary",
        disabled=not dialog.can_submit,
    ):
        dialog.confirm()
        if controller.payment_dialog is None:
            st.rerun()
        st.rerun(scope="fragment")
