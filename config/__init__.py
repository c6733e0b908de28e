"""Configuration module for FinanceiroLB."""

from .settings import config, BackendConfig, AppConfig, Config
from .constants import (
    # Installment status
    STATUS_A_VENCER,
    STATUS_VENCIDO,
    STATUS_PAGO,
    INSTALLMENT_STATUSES,
    STATUS_BADGES,
    # Payments
    PAYMENT_METHODS,
    BULK_EDIT_PAYMENT_METHODS,
    BANKS,
    # Entities
    PERSON_FISICA,
    PERSON_JURIDICA,
    PERSON_TYPES,
    ACTIVE_OPTIONS,
    # Tables
    TABLE_INSTALLMENTS,
    TABLE_ENTITIES,
    # Formats
    DATE_FORMATS,
    DISPLAY_DATE_FORMAT,
    NULL_DISPLAY,
    # Helper functions
    get_status_label,
    get_payment_method_label,
    get_bank_label,
    as_options,
)

__all__ = [
    # Settings
    "config",
    "BackendConfig",
    "AppConfig",
    "Config",
    # Constants
    "STATUS_A_VENCER",
    "STATUS_VENCIDO",
    "STATUS_PAGO",
    "INSTALLMENT_STATUSES",
    "STATUS_BADGES",
    "PAYMENT_METHODS",
    "BULK_EDIT_PAYMENT_METHODS",
    "BANKS",
    "PERSON_FISICA",
    "PERSON_JURIDICA",
    "PERSON_TYPES",
    "ACTIVE_OPTIONS",
    "TABLE_INSTALLMENTS",
    "TABLE_ENTITIES",
    "DATE_FORMATS",
    "DISPLAY_DATE_FORMAT",
    "NULL_DISPLAY",
    # Helper functions
    "get_status_label",
    "get_payment_method_label",
    "get_bank_label",
    "as_options",
]
