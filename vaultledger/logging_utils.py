"""Mini README: Application-wide logging helpers for Vault Ledger.

Structure:
    * resolve_level - accept level names ("debug") or numbers.
    * configure_root_logger - install the single shared stream handler.
    * get_logger - module logger factory used throughout the package.

Usage:
    Modules call ``get_logger(__name__)``. Entry points (the CLI and the web
    application factory) call ``configure_root_logger`` with the configured
    level; repeated calls only adjust the level so no duplicate handlers are
    attached when the app factory runs more than once.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False
_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"


def resolve_level(level: Union[int, str, None]) -> int:
    """Translate a level name or number into a ``logging`` constant."""

    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    candidate = level.strip().upper()
    if candidate.isdigit():
        return int(candidate)
    numeric = logging.getLevelName(candidate)
    if isinstance(numeric, int):
        return numeric
    raise ValueError(f"Unknown log level: {level}")


def configure_root_logger(level: Union[int, str, None] = logging.INFO) -> None:
    """Configure the root logger once, later calls only change the level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(resolve_level(level))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger."""

    return logging.getLogger(name)
