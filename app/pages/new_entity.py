"""New entity form page."""

from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.constants import PERSON_TYPES
from src.controllers import EntityForm, EntityFormData
from app.components import render_form_header, render_form_section, render_notifications
from app.session import get_app_backend


def render_new_entity():
    """Render the new entity form."""
    try:
        backend = get_app_backend()
    except Exception as e:
        st.error(f"Erro ao conectar ao backend: {e}")
        return

    if "entity_form" not in st.session_state:
        st.session_state.entity_form = EntityForm(backend)
    form: EntityForm = st.session_state.entity_form

    render_form_header(form.title, form.description)
    render_notifications(form.pop_notifications())

    # Outside the form so the name label follows the selected type
    tipo_pessoa = st.radio(
        "Tipo de Pessoa",
        options=list(PERSON_TYPES),
        format_func=lambda code: PERSON_TYPES[code],
        horizontal=True,
        key="entity_tipo_pessoa",
    )
    form.data.tipo_pessoa = tipo_pessoa

    with st.form("new_entity_form", clear_on_submit=False):
        with render_form_section("Informações Básicas", "Dados principais da entidade"):
            nome = st.text_input(f"{form.name_label} *", placeholder=form.name_placeholder)
            if "nome" in form.errors:
                st.error(form.errors["nome"])
            documento = st.text_input("CPF" if tipo_pessoa == "FISICA" else "CNPJ")

        with render_form_section("Contato", "Informações de contato"):
            col1, col2 = st.columns(2)
            email = col1.text_input("E-mail", placeholder="email@exemplo.com")
            telefone = col2.text_input("Telefone", placeholder="(11) 99999-9999")

        with render_form_section("Configurações"):
            ativo = st.toggle("Entidade ativa", value=True)
            observacoes = st.text_area("Observações", placeholder="Informações adicionais...")

        submitted = st.form_submit_button(form.submit_label, type="primary")

    if submitted:
        form.data = EntityFormData(
            nome=nome,
            tipo_pessoa=tipo_pessoa,
            documento=documento,
            email=email,
            telefone=telefone,
            ativo=ativo,
            observacoes=observacoes,
        )
        created = form.submit()
        if created is not None:
            # Entities list reloads on next visit
            st.session_state.pop("entities_controller", None)
        st.rerun()
