"""Streamlit pages for FinanceiroLB."""

from .entities import render_entities
from .new_entity import render_new_entity
from .payables import render_payables
from .payables_demo import render_payables_demo

__all__ = [
    "render_entities",
    "render_new_entity",
    "render_payables",
    "render_payables_demo",
]
