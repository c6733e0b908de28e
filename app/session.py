"""Session-scoped objects shared by the pages."""

from typing import Any, Callable
from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.backend import Backend, BackendClient, DemoBackend, uses_demo_backend


@st.cache_resource
def _shared_client() -> BackendClient:
    """REST client shared across sessions."""
    return BackendClient()


def get_app_backend() -> Backend:
    """Backend selected by configuration; demo data stays per session."""
    if uses_demo_backend():
        return get_demo_backend()
    return _shared_client()


def get_demo_backend() -> DemoBackend:
    """Per-session demo backend so demo edits stay private."""
    if "demo_backend" not in st.session_state:
        st.session_state.demo_backend = DemoBackend()
    return st.session_state.demo_backend


def get_controller(key: str, factory: Callable[[], Any]) -> Any:
    """
    Controller stored in ``st.session_state``, created and loaded on first use.
    """
    if key not in st.session_state:
        controller = factory()
        if hasattr(controller, "load"):
            controller.load()
        st.session_state[key] = controller
    return st.session_state[key]
