"""Logging configuration for the ``ledger_import`` package.

Library modules only call ``logging.getLogger(__name__)``. Entry points such
as the CLI call :func:`configure_logging` at startup to attach a single
stream handler to the package logger.
"""

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "ledger_import"
LOG_LEVEL_ENV = "LEDGER_IMPORT_LOG_LEVEL"

_handler: logging.StreamHandler | None = None

logging.getLogger(_PKG_LOGGER_NAME).addHandler(logging.NullHandler())


def parse_level(level: int | str | None) -> int:
    """Resolve a level name, number, or None (env var, then WARNING)."""
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"Unknown log level: {level}")
    env_val = os.getenv(LOG_LEVEL_ENV)
    if env_val:
        return parse_level(env_val)
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.StreamHandler:
    """Attach one StreamHandler to the package logger and return it.

    ``stream`` defaults to ``sys.stderr`` as it is at call time. Repeat calls
    reuse the same handler, pointing it at the new stream and level.
    """
    global _handler

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    logger.setLevel(parse_level(level))
    target = stream if stream is not None else sys.stderr

    if _handler is not None:
        _handler.setStream(target)
        return _handler

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    _handler = logging.StreamHandler(target)
    _handler.setFormatter(
        logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s")
    )
    logger.addHandler(_handler)
    # Avoid double emission via the root logger.
    logger.propagate = False
    return _handler
