"""Backend access: hosted REST client and in-memory demo backend."""

from typing import Union
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from config.logging_config import get_logger

from .client import BackendClient
from .demo import DemoBackend

logger = get_logger("backend")

Backend = Union[BackendClient, DemoBackend]


def uses_demo_backend() -> bool:
    """True when USE_DEMO_BACKEND is set or the hosted backend is not configured."""
    return config.backend.use_demo or not config.backend.is_configured


def get_backend() -> Backend:
    """
    Build the backend selected by configuration.

    Returns:
        A DemoBackend when ``uses_demo_backend()``, otherwise a BackendClient.
    """
    if uses_demo_backend():
        logger.info("Using in-memory demo backend")
        return DemoBackend()
    return BackendClient()


__all__ = ["Backend", "BackendClient", "DemoBackend", "get_backend", "uses_demo_backend"]
