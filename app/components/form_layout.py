"""Layout helpers for form pages."""

import streamlit as st


def render_form_header(title: str, description: str = "") -> None:
    """Page title and subtitle of a form."""
    st.subheader(title)
    if description:
        st.caption(description)


def render_form_section(title: str, description: str = ""):
    """
    Bordered container for a group of fields.

    Usage:
        with render_form_section("Contato"):
            st.text_input("E-mail")
    """
    container = st.container(border=True)
    container.markdown(f"**{title}**")
    if description:
        container.caption(description)
    return container
