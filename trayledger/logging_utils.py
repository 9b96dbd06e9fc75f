"""Mini README: Application-wide logging helpers for Tray Ledger.

Structure:
    * get_logger - factory returning module loggers with shared formatting.
    * configure_root_logger - one-shot setup of the root handler and level.
    * level_for_environment - maps the configured environment onto a level.

Usage:
    Modules call ``get_logger(__name__)`` at import time. The first call
    installs a single stream handler on the root logger; later calls reuse
    it so reloading modules in development never duplicates output. Entry
    points may call ``configure_root_logger`` with an explicit level to
    adjust verbosity after the handler exists.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[int] = None) -> None:
    """Install the storefront log format on the root logger once."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level if level is not None else logging.INFO)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def level_for_environment(environment: str) -> int:
    """Return DEBUG for local environments and INFO everywhere else."""

    if environment.strip().lower() in {"development", "dev", "local"}:
        return logging.DEBUG
    return logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
