"""Entities (counterparties) list with tabs and quick stats."""

from typing import Any, Callable, Dict, List, Optional
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from config.constants import (
    ACTIVE_OPTIONS,
    PERSON_FISICA,
    PERSON_JURIDICA,
    PERSON_TYPES,
    TABLE_ENTITIES,
    as_options,
)
from config.logging_config import get_logger
from src.controllers.base import ListPageController
from src.grid.models import Align, ColumnDescriptor, FilterDescriptor, FilterKind, Row
from src.grid.table_view import TableView
from src.grid.tabs import TabItem, TabState
from src.utils.formatting import format_date

logger = get_logger("entities")


def _is_active(row: Row) -> bool:
    return bool(row.get("ativo"))


# Tab id -> (label, row predicate)
ENTITY_TABS: Dict[str, tuple] = {
    "all": ("Todas", lambda r: True),
    "ativas": ("Ativas", _is_active),
    "inativas": ("Inativas", lambda r: not _is_active(r)),
    "fisicas": ("Pessoas Físicas", lambda r: r.get("tipo_pessoa") == PERSON_FISICA),
    "juridicas": ("Pessoas Jurídicas", lambda r: r.get("tipo_pessoa") == PERSON_JURIDICA),
}

ENTITY_COLUMNS = [
    ColumnDescriptor("id", "ID", renderer=lambda r: f"#{r.get('id')}", width="small"),
    ColumnDescriptor("nome", "Nome"),
    ColumnDescriptor("email", "E-mail"),
    ColumnDescriptor(
        "tipo_pessoa", "Tipo",
        renderer=lambda r: "Física" if r.get("tipo_pessoa") == PERSON_FISICA else "Jurídica",
        width="small",
    ),
    ColumnDescriptor("documento", "Documento", width="medium"),
    ColumnDescriptor(
        "ativo", "Status",
        renderer=lambda r: "Ativo" if _is_active(r) else "Inativo",
        width="small",
        align=Align.CENTER,
    ),
    ColumnDescriptor("telefone", "Telefone", width="medium"),
    ColumnDescriptor("criado_em", "Criado em", renderer=lambda r: format_date(r.get("criado_em")), width="medium"),
]

ENTITY_FILTERS = [
    FilterDescriptor("nome", "Nome", FilterKind.TEXT),
    FilterDescriptor("tipo_pessoa", "Tipo", FilterKind.SELECT, as_options(PERSON_TYPES)),
    FilterDescriptor("ativo", "Status", FilterKind.SELECT, as_options(ACTIVE_OPTIONS)),
]


class EntitiesController(ListPageController):
    """Controller of the entities list page."""

    table = TABLE_ENTITIES
    load_error_message = "Erro ao carregar dados"

    def __init__(self, backend: Any, row_actions: Optional[Callable[[Row], Any]] = None):
        view = TableView(
            ENTITY_COLUMNS,
            ENTITY_FILTERS,
            row_actions=row_actions,
            search_placeholder="Buscar entidades...",
        )
        super().__init__(backend, view)
        self.tabs = TabState(
            tabs=[TabItem(tab_id, label, badge=0) for tab_id, (label, _) in ENTITY_TABS.items()],
            active_tab="all",
            on_change=self._on_tab_change,
        )

    def fetch(self) -> List[Row]:
        return self.backend.select(
            self.table,
            order_by="id",
            ascending=False,
            limit=config.app.entity_load_limit,
        )

    def tab_rows(self, tab_id: str) -> List[Row]:
        """Loaded entities belonging to tab ``tab_id``."""
        _, predicate = ENTITY_TABS.get(tab_id, ENTITY_TABS["all"])
        return [r for r in self.all_rows if predicate(r)]

    def show_rows(self, rows: List[Row]) -> None:
        for tab_id in ENTITY_TABS:
            self.tabs.update_tab(tab_id, badge=len(self.tab_rows(tab_id)))
        self.view.set_rows(self.tab_rows(self.tabs.active_tab))

    def _on_tab_change(self, tab_id: str) -> None:
        self.view.set_rows(self.tab_rows(tab_id))

    def select_tab(self, tab_id: str) -> None:
        """Switch tabs; filters and search stay in place."""
        self.tabs.set_active_tab(tab_id)

    def stats(self) -> Dict[str, int]:
        """Quick stats cards: total, active, individuals, companies."""
        return {
            "total": len(self.all_rows),
            "ativas": len(self.tab_rows("ativas")),
            "fisicas": len(self.tab_rows("fisicas")),
            "juridicas": len(self.tab_rows("juridicas")),
        }

    def delete_entity(self, entity_id: Any) -> bool:
        """Delete one entity and reload the list."""
        return self.run_mutation(
            lambda: self.backend.delete(self.table, [entity_id]),
            "Entidade excluída com sucesso",
            "Erro ao excluir",
        )
