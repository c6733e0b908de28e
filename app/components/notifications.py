"""Render controller notifications as Streamlit alerts."""

from typing import Iterable
from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.controllers.base import ERROR, SUCCESS, WARNING, Notification


def render_notifications(notifications: Iterable[Notification]) -> None:
    """Show each pending notification once."""
    for note in notifications:
        text = f"**{note.title}**" + (f": {note.message}" if note.message else "")
        if note.level == ERROR:
            st.error(text)
        elif note.level == WARNING:
            st.warning(text)
        elif note.level == SUCCESS:
            st.success(text)
        else:
            st.info(text)
