"""Shared plumbing for page controllers.

A page controller owns a backend handle and a table view. It loads rows into
the view and performs bulk writes, reporting the outcome as notifications the
page shows on its next render. Writes are never applied locally: after a
successful write the rows are reloaded from the backend.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.logging_config import get_logger
from src.errors import BackendError, DialogBusyError
from src.grid.models import Row, row_id
from src.grid.table_view import TableView

logger = get_logger("controllers")

SUCCESS = "success"
ERROR = "error"
WARNING = "warning"
INFO = "info"


@dataclass
class Notification:
    """A transient message for the user."""

    level: str
    title: str
    message: str = ""


class Notifier:
    """Collects notifications until the page drains them."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, level: str, title: str, message: str = "") -> None:
        self.notifications.append(Notification(level, title, message))

    def pop_notifications(self) -> List[Notification]:
        """Return and forget the pending notifications."""
        pending, self.notifications = self.notifications, []
        return pending


class ListPageController(Notifier):
    """
    Base controller for a list page backed by one table.

    Subclasses set ``table`` and may override ``fetch`` and ``map_row``.
    """

    table: str = ""
    load_error_message = "Não foi possível carregar os dados"

    def __init__(self, backend: Any, view: TableView):
        super().__init__()
        self.backend = backend
        self.view = view
        self.is_updating = False
        self.all_rows: List[Row] = []

    def fetch(self) -> List[Row]:
        """Read the raw rows from the backend."""
        return self.backend.select(self.table)

    def map_row(self, row: Row) -> Row:
        """Convert a backend row to the shape shown by the table."""
        mapped = dict(row)
        mapped["id"] = row_id(row)
        return mapped

    def show_rows(self, rows: List[Row]) -> None:
        """Hand the loaded rows to the view."""
        self.view.set_rows(rows)

    def load(self) -> bool:
        """
        Load rows into the view.

        Returns:
            True on success. On failure the previous rows are kept and an
            error notification is queued.
        """
        self.view.set_loading(True)
        try:
            rows = [self.map_row(r) for r in self.fetch()]
        except BackendError as e:
            logger.error(f"Failed to load {self.table}: {e}")
            self.notify(ERROR, "Erro", f"{self.load_error_message}: {e}")
            return False
        finally:
            self.view.set_loading(False)

        self.all_rows = rows
        self.show_rows(rows)
        logger.info(f"Showing {len(rows)} row(s) from {self.table}")
        return True

    def run_mutation(
        self,
        action: Callable[[], Any],
        success_message: str,
        error_message: str,
        dialog: Optional[Any] = None,
    ) -> bool:
        """
        Perform a backend write as a single unit.

        The busy flag (and the dialog's ``is_loading``) is set for the
        duration of the call and cleared on every exit path. On success the
        selection is cleared and the rows are reloaded; on failure the
        selection, the dialog and the rows are left untouched.

        Args:
            action: Callable performing the backend write(s).
            success_message: Notification text on success.
            error_message: Notification text on failure.
            dialog: Dialog whose busy flag mirrors the call.

        Returns:
            True if the write succeeded.

        Raises:
            DialogBusyError: If another write is still in progress
        """
        if self.is_updating:
            raise DialogBusyError("Another operation is still in progress")

        self.is_updating = True
        if dialog is not None:
            dialog.is_loading = True
        try:
            action()
        except BackendError as e:
            logger.error(f"{error_message}: {e}")
            self.notify(ERROR, "Erro", f"{error_message}: {e}")
            return False
        finally:
            self.is_updating = False
            if dialog is not None:
                dialog.is_loading = False

        self.notify(SUCCESS, "Sucesso", success_message)
        self.view.dismiss_bulk_bar()
        self.load()
        return True

    @staticmethod
    def ids_of(rows: Sequence[Row]) -> List[str]:
        return [row_id(r) for r in rows]
