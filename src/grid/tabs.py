"""Tab strip state shared by a tab list and its tab content.

The owning page creates one ``TabState`` and passes it explicitly to whatever
renders the tab buttons and the active tab's content.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional


@dataclass(frozen=True)
class TabItem:
    """A tab button: identifier, label and optional count badge."""

    id: str
    label: str
    badge: Optional[Any] = None
    closable: bool = False
    disabled: bool = False

    @property
    def title(self) -> str:
        """Label with the badge appended, as shown on the button."""
        if self.badge is None or self.badge == "":
            return self.label
        return f"{self.label} ({self.badge})"


@dataclass
class TabState:
    """Ordered tabs plus the identifier of the active one."""

    tabs: List[TabItem] = field(default_factory=list)
    active_tab: str = ""
    on_change: Optional[Callable[[str], None]] = None

    def __post_init__(self):
        if not self.active_tab and self.tabs:
            self.active_tab = self.tabs[0].id

    def _index(self, tab_id: str) -> Optional[int]:
        for i, tab in enumerate(self.tabs):
            if tab.id == tab_id:
                return i
        return None

    def get_tab(self, tab_id: str) -> Optional[TabItem]:
        index = self._index(tab_id)
        return None if index is None else self.tabs[index]

    @property
    def active(self) -> Optional[TabItem]:
        return self.get_tab(self.active_tab)

    def set_active_tab(self, tab_id: str) -> None:
        """Activate a tab; unknown or disabled tabs are ignored."""
        tab = self.get_tab(tab_id)
        if tab is None or tab.disabled or tab_id == self.active_tab:
            return
        self.active_tab = tab_id
        if self.on_change is not None:
            self.on_change(tab_id)

    def add_tab(self, tab: TabItem) -> None:
        """Append a tab and activate it; an existing id is just activated."""
        if self._index(tab.id) is None:
            self.tabs.append(tab)
        self.set_active_tab(tab.id)

    def remove_tab(self, tab_id: str) -> None:
        """
        Close a tab.

        When the closed tab was active, the tab now at its position (or the
        last one) becomes active.
        """
        index = self._index(tab_id)
        if index is None:
            return
        del self.tabs[index]
        if self.active_tab != tab_id:
            return
        if not self.tabs:
            self.active_tab = ""
            return
        self.set_active_tab(self.tabs[min(index, len(self.tabs) - 1)].id)

    def update_tab(self, tab_id: str, **changes: Any) -> None:
        """Replace fields of a tab, e.g. ``update_tab("ativas", badge=3)``."""
        index = self._index(tab_id)
        if index is not None:
            self.tabs[index] = replace(self.tabs[index], **changes)

    def upsert_tab(self, tab: TabItem) -> None:
        """Replace a tab with the same id, or append it without activating."""
        index = self._index(tab.id)
        if index is None:
            self.tabs.append(tab)
            if not self.active_tab:
                self.active_tab = tab.id
        else:
            self.tabs[index] = tab
