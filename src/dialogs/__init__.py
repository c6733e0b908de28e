"""Bulk mutation dialogs: collect input for the selected rows, emit a payload."""

from .bulk_edit import BulkEditDialog, BulkEditField, BulkPatch
from .payment import PaymentDialog, PaymentRecord, PaymentSummary

__all__ = [
    "BulkEditDialog",
    "BulkEditField",
    "BulkPatch",
    "PaymentDialog",
    "PaymentRecord",
    "PaymentSummary",
]
