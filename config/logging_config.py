"""Logging configuration for FinanceiroLB.

Streamlit re-executes the script on every interaction, so ``setup_logging``
is idempotent: it replaces the handlers of the ``financeiro_lb`` logger
instead of stacking new ones. Records do not propagate to the root logger,
which Streamlit configures with its own handler.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "financeiro_lb"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# requests opens a connection per backend call and logs each one at DEBUG
NOISY_LOGGERS = ("urllib3", "watchdog")


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        log_level: Level name; defaults to LOG_LEVEL from the settings
        log_file: Optional file to append to; defaults to LOG_FILE
        log_to_console: Whether to also log to stdout

    Returns:
        The ``financeiro_lb`` logger
    """
    if log_level is None or log_file is None:
        from config.settings import config

        log_level = log_level or config.app.log_level
        log_file = log_file or config.app.log_file

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger under the application namespace.

    Args:
        name: Module name, e.g. ``backend`` gives ``financeiro_lb.backend``

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
