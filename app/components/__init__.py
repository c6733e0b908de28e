"""Reusable UI components for FinanceiroLB."""

from .bulk_edit_dialog import render_bulk_edit_dialog
from .data_table import render_data_table
from .form_layout import render_form_header, render_form_section
from .notifications import render_notifications
from .payment_dialog import render_payment_dialog
from .tabs import render_tab_list

__all__ = [
    "render_bulk_edit_dialog",
    "render_data_table",
    "render_form_header",
    "render_form_section",
    "render_notifications",
    "render_payment_dialog",
    "render_tab_list",
]
