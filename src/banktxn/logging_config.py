"""Centralized logging configuration for the ``banktxn`` package.

Library modules only call ``logging.getLogger(__name__)`` and never attach
handlers. Entry points (the CLI) call ``configure_logging`` once at startup.
"""

import logging
import os
import sys
from typing import IO, Optional, Union

_PKG_LOGGER_NAME = "banktxn"
_ENV_VAR = "BANKTXN_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _parse_level(level: Union[int, str, None]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"Unknown log level: '{level}'")
    env_val = os.getenv(_ENV_VAR)
    if env_val:
        return _parse_level(env_val)
    return logging.WARNING


def configure_logging(
    level: Union[int, str, None] = None,
    *,
    fmt: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Attach a single stderr handler to the package logger.

    Later calls only adjust the level.

    Args:
        level: Level as ``int`` or name (e.g. ``"INFO"``). Defaults to the
            ``BANKTXN_LOG_LEVEL`` environment variable, then WARNING
        fmt: Optional format string for log records
        stream: Output stream, ``sys.stderr`` when omitted

    Raises:
        ValueError: If the level name is not a logging level
    """
    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    numeric_level = _parse_level(level)

    if _CONFIGURED:
        logger.setLevel(numeric_level)
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    logger.setLevel(numeric_level)
    logger.addHandler(handler)

    _CONFIGURED = True
