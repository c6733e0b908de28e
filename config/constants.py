"""Constants for FinanceiroLB application.

Code-to-label mappings shared by the list pages, the bulk dialogs and the
entity form. Codes are the values stored in the backend; labels are what the
UI shows.
"""

from typing import Dict, List, Optional, Tuple


# =============================================================================
# Installment Status
# =============================================================================

STATUS_A_VENCER = "a_vencer"
STATUS_VENCIDO = "vencido"
STATUS_PAGO = "pago"

INSTALLMENT_STATUSES = {
    STATUS_A_VENCER: "A Vencer",
    STATUS_VENCIDO: "Vencido",
    STATUS_PAGO: "Pago",
}

# Badge variant per status
STATUS_BADGES = {
    STATUS_PAGO: "default",
    STATUS_VENCIDO: "destructive",
    STATUS_A_VENCER: "secondary",
}


def get_status_label(code: Optional[str]) -> str:
    """Get display label for an installment status code."""
    if not code:
        return INSTALLMENT_STATUSES[STATUS_A_VENCER]
    return INSTALLMENT_STATUSES.get(code, INSTALLMENT_STATUSES[STATUS_A_VENCER])


# =============================================================================
# Payment Methods and Banks
# =============================================================================

PAYMENT_METHODS = {
    "pix": "PIX",
    "ted": "TED",
    "doc": "DOC",
    "boleto": "Boleto",
    "cartao": "Cartão",
    "dinheiro": "Dinheiro",
    "cheque": "Cheque",
}

# Subset offered by the installment bulk-edit dialog
BULK_EDIT_PAYMENT_METHODS = ("pix", "ted", "doc", "boleto", "cartao")

BANKS = {
    "001": "Banco do Brasil",
    "104": "Caixa Econômica Federal",
    "237": "Bradesco",
    "341": "Itaú",
    "033": "Santander",
    "745": "Citibank",
    "399": "HSBC",
    "outro": "Outro",
}


def get_payment_method_label(code: Optional[str]) -> str:
    """Get display label for a payment method code."""
    if not code:
        return ""
    return PAYMENT_METHODS.get(code, code)


def get_bank_label(code: Optional[str]) -> str:
    """Get display label for a bank code."""
    if not code:
        return ""
    return BANKS.get(code, code)


# =============================================================================
# Entities (counterparties)
# =============================================================================

PERSON_FISICA = "FISICA"
PERSON_JURIDICA = "JURIDICA"

PERSON_TYPES = {
    PERSON_FISICA: "Pessoa Física",
    PERSON_JURIDICA: "Pessoa Jurídica",
}

ACTIVE_OPTIONS = {
    "true": "Ativo",
    "false": "Inativo",
}


# =============================================================================
# Tables
# =============================================================================

TABLE_INSTALLMENTS = "parcelas_conta_pagar"
TABLE_ENTITIES = "entidades"


# =============================================================================
# Date Formats
# =============================================================================

# Tried in order after ISO-8601 parsing fails
DATE_FORMATS = [
    "%d/%m/%Y",
    "%Y-%m-%d",
    "%Y%m%d",
    "%d-%m-%Y",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y %H:%M:%S",
]

DISPLAY_DATE_FORMAT = "%d/%m/%Y"

NULL_DISPLAY = "-"


def as_options(mapping: Dict[str, str], keys: Optional[Tuple[str, ...]] = None) -> List[Tuple[str, str]]:
    """Convert a code-to-label mapping into (value, label) option pairs."""
    if keys is None:
        return list(mapping.items())
    return [(key, mapping[key]) for key in keys]
