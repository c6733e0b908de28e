"""Batch payment dialog state.

Seeds one payment record per selected installment, lets the user adjust the
paid amount and payment details per row, and computes the batch totals.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.logging_config import get_logger
from src.errors import DialogBusyError
from src.grid.models import Row, row_id
from src.utils.formatting import format_currency, parse_date, parse_decimal

logger = get_logger("payment_dialog")

ZERO = Decimal("0")

INTEREST_LABEL = "Juros"
DISCOUNT_LABEL = "Desconto"

EDITABLE_FIELDS = (
    "paid_value",
    "payment_date",
    "payment_method",
    "bank",
    "identifier",
    "observations",
)


@dataclass(frozen=True)
class PaymentRecord:
    """Payment details for one installment."""

    id: str
    original_value: Decimal
    paid_value: Decimal
    payment_date: str
    payment_method: str = ""
    bank: str = ""
    identifier: str = ""
    observations: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "original_value": self.original_value,
            "paid_value": self.paid_value,
            "payment_date": self.payment_date,
            "payment_method": self.payment_method,
            "bank": self.bank,
            "identifier": self.identifier,
            "observations": self.observations,
        }


@dataclass(frozen=True)
class PaymentSummary:
    """Batch totals shown above the per-row cards."""

    total_original: Decimal
    total_paid: Decimal
    difference: Decimal
    adjustment_label: Optional[str] = None

    @property
    def difference_display(self) -> str:
        """Signed currency form, e.g. ``+R$ 10,00``."""
        return format_currency(self.difference, signed=True)


def _iso_timestamp(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).isoformat()
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"Invalid payment date: {value!r}")
    return str(value).strip()


class PaymentDialog:
    """
    Form state of the batch payment dialog.

    Args:
        selected_items: Installments to pay.
        on_save: Receives the list of PaymentRecord on confirm.
        is_loading: Owner-controlled busy flag.
        now: Default payment timestamp (current time when omitted).
        value_key: Row field holding the installment amount.
    """

    def __init__(
        self,
        selected_items: Sequence[Row],
        on_save: Optional[Callable[[List[PaymentRecord]], Any]] = None,
        is_loading: bool = False,
        now: Optional[datetime] = None,
        value_key: str = "valor_parcela",
    ):
        self.selected_items: List[Row] = list(selected_items)
        self.on_save = on_save
        self.is_loading = is_loading
        self.value_key = value_key
        self.global_observations = ""

        timestamp = (now or datetime.now()).isoformat()
        self._payments: List[PaymentRecord] = []
        for item in self.selected_items:
            original = parse_decimal(item.get(value_key)) or ZERO
            self._payments.append(PaymentRecord(
                id=row_id(item),
                original_value=original,
                paid_value=original,
                payment_date=timestamp,
            ))

    @property
    def payments(self) -> List[PaymentRecord]:
        return list(self._payments)

    def get_payment(self, payment_id: Any) -> Optional[PaymentRecord]:
        for payment in self._payments:
            if payment.id == str(payment_id):
                return payment
        return None

    def item_label(self, index: int) -> str:
        """Card title for the ``index``-th installment."""
        item = self.selected_items[index]
        return item.get("descricao") or f"Conta {index + 1}"

    def update_payment(self, payment_id: Any, field_name: str, value: Any) -> None:
        """
        Edit one field of one payment record.

        Unknown payment ids are ignored. An unparseable paid value is
        recorded as zero.

        Raises:
            ValueError: If ``field_name`` is not editable
        """
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(f"Field is not editable: {field_name}")

        if field_name == "paid_value":
            value = parse_decimal(value) or ZERO
        elif field_name == "payment_date":
            value = _iso_timestamp(value)
        else:
            value = "" if value is None else str(value)

        for i, payment in enumerate(self._payments):
            if payment.id == str(payment_id):
                self._payments[i] = replace(payment, **{field_name: value})
                return

    def summary(self) -> PaymentSummary:
        """Sum of original values, sum of paid values and their difference."""
        total_original = sum((p.original_value for p in self._payments), ZERO)
        total_paid = sum((p.paid_value for p in self._payments), ZERO)
        difference = total_paid - total_original

        label = None
        if difference > 0:
            label = INTEREST_LABEL
        elif difference < 0:
            label = DISCOUNT_LABEL
        return PaymentSummary(total_original, total_paid, difference, label)

    @property
    def can_submit(self) -> bool:
        return not self.is_loading

    @property
    def title(self) -> str:
        return "Pagamento em Lote"

    @property
    def description(self) -> str:
        return f"{len(self.selected_items)} conta(s) selecionada(s) para pagamento"

    @property
    def submit_label(self) -> str:
        if self.is_loading:
            return "Processando..."
        return f"Confirmar Pagamento ({len(self.selected_items)})"

    def final_payments(self) -> List[PaymentRecord]:
        """Records with blank observations replaced by the global observations."""
        return [
            p if p.observations else replace(p, observations=self.global_observations)
            for p in self._payments
        ]

    def confirm(self) -> List[PaymentRecord]:
        """
        Emit the payment records to the owner.

        Raises:
            DialogBusyError: If the owner is still processing a previous save
        """
        if self.is_loading:
            raise DialogBusyError("Payments are still being recorded")
        records = self.final_payments()
        summary = self.summary()
        logger.info(
            f"Confirming {len(records)} payment(s), total {format_currency(summary.total_paid)}"
        )
        if self.on_save is not None:
            self.on_save(records)
        return records
