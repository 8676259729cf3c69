"""Logging configuration for obj-for-dto.

Library modules only ever call ``get_logger(__name__)``. Handlers are
installed once by the command line entry point through ``setup_logging``.

Levels are resolved in precedence order:
    CLI flag  >  OBJ_FOR_DTO_LOG_LEVEL env var  >  WARNING
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "OBJ_FOR_DTO_LOG_LEVEL"

_FMT_MINIMAL = "%(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT = "%H:%M:%S"
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_ROOT_LOGGER_NAME = "obj_for_dto"


def get_logger(name: str = _ROOT_LOGGER_NAME) -> logging.Logger:
    """Return the logger for a module of this package."""
    return logging.getLogger(name)


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Configure logging for the command line process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Falls back to the environment variable, then WARNING.
        log_file: Optional path of a log file that receives full detail.
    """
    numeric_level = _parse_level(level or os.environ.get(LOG_LEVEL_ENV))

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    package_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    _remove_handlers(package_logger)
    package_logger.addHandler(console)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        package_logger.addHandler(file_handler)
        package_logger.setLevel(logging.DEBUG)


def _remove_handlers(logger: logging.Logger) -> None:
    """Detach and close handlers left by an earlier setup_logging call."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
