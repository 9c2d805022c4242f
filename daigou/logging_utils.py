"""Mini README: Application-wide logging helpers for the daigou ledger.

Structure:
    * configure_root_logger - install the shared stream handler once.
    * get_logger - module logger factory used across the package.

Usage:
    Modules call ``get_logger(__name__)`` at import time. The launcher may call
    ``configure_root_logger`` first with the level from settings; later calls
    are ignored so reloading the web app never duplicates handlers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _coerce_level(level: Union[int, str]) -> int:
    """Accept numeric levels or names such as ``"debug"``."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger with the ledger's log format."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(_coerce_level(level))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
