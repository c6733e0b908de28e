"""Accounts payable installments list.

Loads ``parcelas_conta_pagar``, shows it in a selectable table and wires the
bulk-edit, batch payment and bulk delete actions to backend writes.
"""

from datetime import datetime
from typing import Any, Callable, List, Optional
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.constants import (
    BULK_EDIT_PAYMENT_METHODS,
    INSTALLMENT_STATUSES,
    PAYMENT_METHODS,
    STATUS_PAGO,
    TABLE_INSTALLMENTS,
    as_options,
    get_payment_method_label,
    get_status_label,
)
from config.logging_config import get_logger
from src.controllers.base import WARNING, ListPageController
from src.dialogs.bulk_edit import BulkEditDialog, BulkEditField, BulkPatch
from src.dialogs.payment import PaymentDialog, PaymentRecord
from src.grid.models import (
    Align,
    BulkAction,
    ColumnDescriptor,
    FilterDescriptor,
    FilterKind,
    Row,
)
from src.grid.table_view import TableView
from src.utils.formatting import format_currency, format_date, parse_decimal

logger = get_logger("installments")


INSTALLMENT_BULK_EDIT_FIELDS = [
    BulkEditField("status", "Status", "select", as_options(INSTALLMENT_STATUSES)),
    BulkEditField(
        "forma_pagto",
        "Forma de Pagamento",
        "select",
        as_options(PAYMENT_METHODS, BULK_EDIT_PAYMENT_METHODS),
    ),
    BulkEditField("data_vencimento", "Nova Data de Vencimento", "date"),
    BulkEditField("observacoes", "Observações", "textarea", placeholder="Observações adicionais..."),
]


def _creditor_name(row: Row) -> Optional[str]:
    creditor = row.get("credor")
    if isinstance(creditor, dict):
        return creditor.get("nome")
    return None


INSTALLMENT_COLUMNS = [
    ColumnDescriptor("descricao", "Descrição"),
    ColumnDescriptor("credor", "Credor", renderer=_creditor_name),
    ColumnDescriptor(
        "valor_parcela", "Valor",
        renderer=lambda r: format_currency(r.get("valor_parcela")),
        width="medium",
        align=Align.RIGHT,
    ),
    ColumnDescriptor("data_vencimento", "Vencimento", renderer=lambda r: format_date(r.get("data_vencimento"))),
    ColumnDescriptor("status", "Status", renderer=lambda r: get_status_label(r.get("status"))),
    ColumnDescriptor(
        "forma_pagto", "Forma Pagamento",
        renderer=lambda r: get_payment_method_label(r.get("forma_pagto")) or None,
    ),
    ColumnDescriptor("pago_em", "Data Pagamento", renderer=lambda r: format_date(r.get("pago_em"))),
]

INSTALLMENT_FILTERS = [
    FilterDescriptor("status", "Status", FilterKind.SELECT, as_options(INSTALLMENT_STATUSES)),
    FilterDescriptor(
        "forma_pagto", "Forma de Pagamento", FilterKind.SELECT, as_options(PAYMENT_METHODS)
    ),
    FilterDescriptor("data_vencimento", "Vencimento", FilterKind.DATE_RANGE),
]


def map_installment(row: Row) -> Row:
    """Shape a backend installment row for the table."""
    creditor = row.get("credor")
    if creditor is None and row.get("credor_nome"):
        creditor = {"nome": row["credor_nome"]}
    amount = parse_decimal(row.get("valor_parcela"))
    return {
        "id": str(row.get("id")),
        "descricao": row.get("descricao") or f"Parcela {row.get('num_parcela') or 1}",
        "valor_parcela": float(amount) if amount is not None else 0.0,
        "data_vencimento": row.get("data_vencimento"),
        "status": row.get("status"),
        "forma_pagto": row.get("forma_pagto"),
        "doc_pagto": row.get("doc_pagto"),
        "pago_em": row.get("pago_em"),
        "observacoes": row.get("observacoes"),
        "credor": creditor,
    }


def payment_patch(record: PaymentRecord) -> dict:
    """Backend update that settles one installment."""
    return {
        "status": STATUS_PAGO,
        "valor_parcela": record.paid_value,
        "pago_em": record.payment_date,
        "forma_pagto": record.payment_method or None,
        "doc_pagto": record.identifier or None,
    }


class InstallmentsController(ListPageController):
    """Controller of the accounts payable list page."""

    table = TABLE_INSTALLMENTS
    load_error_message = "Não foi possível carregar as contas"

    def __init__(
        self,
        backend: Any,
        now: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the controller and its table view.

        Args:
            backend: BackendClient or DemoBackend.
            now: Clock used to seed payment dates.
        """
        view = TableView(
            INSTALLMENT_COLUMNS,
            INSTALLMENT_FILTERS,
            selectable=True,
            bulk_actions=[
                BulkAction("edit", "Editar", self.open_bulk_edit),
                BulkAction("pay", "Marcar como Pago", self.open_payment),
                BulkAction("delete", "Excluir", self.delete_selected, destructive=True),
            ],
            search_placeholder="Buscar contas...",
        )
        super().__init__(backend, view)
        self.now = now or datetime.now
        self.bulk_edit_dialog: Optional[BulkEditDialog] = None
        self.payment_dialog: Optional[PaymentDialog] = None

    def fetch(self) -> List[Row]:
        return self.backend.select(self.table, order_by="data_vencimento", ascending=False)

    def map_row(self, row: Row) -> Row:
        return map_installment(row)

    # ------------------------------------------------------------------
    # Bulk edit
    # ------------------------------------------------------------------

    def open_bulk_edit(self, selected: List[Row]) -> BulkEditDialog:
        """Open the bulk-edit dialog for the selected installments."""
        self.bulk_edit_dialog = BulkEditDialog(
            INSTALLMENT_BULK_EDIT_FIELDS, selected, on_save=self.bulk_update
        )
        return self.bulk_edit_dialog

    def close_bulk_edit(self) -> None:
        self.bulk_edit_dialog = None

    def bulk_update(self, patch: BulkPatch) -> bool:
        """Apply a bulk-edit patch to the selected installments."""
        selected = self.view.selected_rows()
        if not patch:
            self.notify(WARNING, "Nada a atualizar", "Preencha ao menos um campo")
            return False

        ids = self.ids_of(selected)
        ok = self.run_mutation(
            lambda: self.backend.update(self.table, patch.to_dict(), ids),
            f"{len(ids)} parcela(s) atualizada(s) com sucesso",
            "Não foi possível atualizar as parcelas",
            dialog=self.bulk_edit_dialog,
        )
        if ok:
            self.close_bulk_edit()
        return ok

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    def open_payment(self, selected: List[Row]) -> PaymentDialog:
        """Open the batch payment dialog for the selected installments."""
        self.payment_dialog = PaymentDialog(selected, on_save=self.record_payments, now=self.now())
        return self.payment_dialog

    def close_payment(self) -> None:
        self.payment_dialog = None

    def record_payments(self, payments: List[PaymentRecord]) -> bool:
        """Settle each installment with its payment record."""

        def settle():
            for record in payments:
                self.backend.update_one(self.table, payment_patch(record), record.id)

        ok = self.run_mutation(
            settle,
            f"{len(payments)} pagamento(s) processado(s) com sucesso",
            "Não foi possível processar os pagamentos",
            dialog=self.payment_dialog,
        )
        if ok:
            self.close_payment()
        return ok

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_selected(self, selected: Optional[List[Row]] = None) -> bool:
        """Delete the given (or currently selected) installments."""
        rows = selected if selected is not None else self.view.selected_rows()
        if not rows:
            return False
        ids = self.ids_of(rows)
        return self.run_mutation(
            lambda: self.backend.delete(self.table, ids),
            f"{len(ids)} parcela(s) excluída(s) com sucesso",
            "Não foi possível excluir as parcelas",
        )
