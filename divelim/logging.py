"""Logging setup shared by every divelim module.

All loggers hang off a single ``"divelim"`` logger that owns the only handler.
Child loggers created through `get_logger` carry no level of their own, so a
call to `set_global_log_level` reaches every module at once. The initial level
comes from the ``DIVELIM_LOG_LEVEL`` environment variable when it names a
standard level, otherwise INFO.
"""

import logging
import os
import sys
from typing import Optional, Union

LOG_LEVEL_ENV = "DIVELIM_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_PACKAGE_LOGGER = "divelim"
_configured = False


def level_from_name(value: Union[int, str, None], default: int = logging.INFO) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value.

    Integers pass through unchanged; unknown or empty names give ``default``.
    """
    if isinstance(value, int):
        return value
    if not value:
        return default
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the package handler to the ``"divelim"`` logger.

    Only the first call has an effect; `reset_logging` re-arms it.

    Args:
        level: Logging level. ``None`` reads ``DIVELIM_LOG_LEVEL`` and falls
            back to INFO.
        format_string: Record format (default: `DEFAULT_FORMAT`).
        handler: Destination handler (default: a stdout StreamHandler).
    """
    global _configured
    if _configured:
        return

    if level is None:
        level = level_from_name(os.getenv(LOG_LEVEL_ENV))

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(level)

    handler = handler or logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    package_logger.addHandler(handler)

    # pytest's caplog listens on the stdlib root logger
    package_logger.propagate = True
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, configuring the package logger first."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: Union[int, str]) -> None:
    """Change the level of the package logger and its handlers.

    Args:
        level: Numeric level or a level name like ``"WARNING"``.
    """
    setup_root_logger()
    numeric = level_from_name(level)
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.setLevel(numeric)
    for handler in package_logger.handlers:
        handler.setLevel(numeric)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the package handler and level so the next setup starts clean."""
    global _configured
    _configured = False
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


setup_root_logger()
