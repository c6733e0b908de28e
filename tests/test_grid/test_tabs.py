"""Tests for tab state."""

import pytest


@pytest.fixture
def tabs():
    from src.grid.tabs import TabItem, TabState

    changes = []
    state = TabState(
        tabs=[TabItem("all", "Todas", badge=7), TabItem("ativas", "Ativas"), TabItem("inativas", "Inativas")],
        on_change=changes.append,
    )
    state.changes = changes
    return state


class TestTabState:
    """Tests for TabState."""

    def test_first_tab_is_active_by_default(self, tabs):
        """Test the first tab is active when none is given."""
        assert tabs.active_tab == "all"

    def test_set_active_tab_notifies(self, tabs):
        """Test switching tabs calls on_change once."""
        tabs.set_active_tab("ativas")
        tabs.set_active_tab("ativas")

        assert tabs.active_tab == "ativas"
        assert tabs.changes == ["ativas"]

    def test_unknown_and_disabled_tabs_are_ignored(self, tabs):
        """Test invalid targets leave the active tab alone."""
        tabs.set_active_tab("missing")
        tabs.update_tab("inativas", disabled=True)
        tabs.set_active_tab("inativas")

        assert tabs.active_tab == "all"

    def test_add_tab_activates_it(self, tabs):
        """Test adding a tab appends and activates it."""
        from src.grid.tabs import TabItem

        tabs.add_tab(TabItem("fisicas", "Pessoas Físicas"))

        assert [t.id for t in tabs.tabs][-1] == "fisicas"
        assert tabs.active_tab == "fisicas"

    def test_add_existing_tab_only_activates(self, tabs):
        """Test adding a known id does not duplicate it."""
        from src.grid.tabs import TabItem

        tabs.add_tab(TabItem("ativas", "Ativas"))

        assert len(tabs.tabs) == 3
        assert tabs.active_tab == "ativas"

    def test_remove_active_tab_activates_neighbour(self, tabs):
        """Test closing the active tab moves to the tab in its place."""
        tabs.set_active_tab("ativas")
        tabs.remove_tab("ativas")

        assert tabs.active_tab == "inativas"

        tabs.remove_tab("inativas")
        assert tabs.active_tab == "all"

        tabs.remove_tab("all")
        assert tabs.active_tab == ""

    def test_remove_inactive_tab_keeps_active(self, tabs):
        """Test closing another tab leaves the selection as is."""
        tabs.remove_tab("inativas")

        assert tabs.active_tab == "all"
        assert [t.id for t in tabs.tabs] == ["all", "ativas"]

    def test_update_tab_badge_and_title(self, tabs):
        """Test badges are shown in the tab title."""
        tabs.update_tab("ativas", badge=3)

        assert tabs.get_tab("ativas").title == "Ativas (3)"
        assert tabs.get_tab("inativas").title == "Inativas"

    def test_upsert_tab(self, tabs):
        """Test upsert replaces in place or appends without activating."""
        from src.grid.tabs import TabItem

        tabs.upsert_tab(TabItem("all", "Todas", badge=0))
        tabs.upsert_tab(TabItem("juridicas", "Pessoas Jurídicas"))

        assert tabs.get_tab("all").badge == 0
        assert tabs.tabs[-1].id == "juridicas"
        assert tabs.active_tab == "all"
