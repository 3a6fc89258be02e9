# log.py
# SPDX-License-Identifier: MIT
"""Logging setup for copyhead.

Every module logs through ``get_logger(__name__)``, so all records land under
the ``copyhead`` logger. That logger carries a NullHandler: used as a library,
copyhead prints nothing until the host application, the CLI or a
``[logging]`` config table calls :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

__all__ = [
    "DEFAULT_FORMAT",
    "PACKAGE_LOGGER_NAME",
    "get_logger",
    "configure_logging",
]

PACKAGE_LOGGER_NAME = "copyhead"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def _level_number(level: int | str) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.strip().upper())
    return number if isinstance(number, int) else logging.INFO


def _stream_handler(logger: logging.Logger) -> Optional[logging.StreamHandler]:
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            return handler
    return None


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``name``'s logger, or the package logger when ``name`` is empty."""
    return logging.getLogger(name or PACKAGE_LOGGER_NAME)


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Optional[IO[str]] = None,
    fmt: str | None = None,
    propagate: bool | None = None,
    logger_name: str = PACKAGE_LOGGER_NAME,
) -> logging.Logger:
    """Send copyhead log records to a stream.

    Repeated calls reuse the logger's stream handler instead of stacking new
    ones. A handler whose stream was closed is pointed at ``stream``, and an
    explicit ``fmt`` replaces the handler's format.

    Args:
        level (int | str): Level number or name such as ``"debug"``; unknown
            names fall back to INFO.
        stream (IO[str] | None): Destination; defaults to ``sys.stderr``.
        fmt (str | None): Record format; :data:`DEFAULT_FORMAT` for a new
            handler.
        propagate (bool | None): Forward records to ancestor loggers. None
            keeps propagation on so pytest's ``caplog`` still sees them.
        logger_name (str): Logger to configure.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = get_logger(logger_name)
    logger.setLevel(_level_number(level))
    logger.propagate = True if propagate is None else bool(propagate)
    target = stream if stream is not None else sys.stderr

    handler = _stream_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(target)
        handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
        logger.addHandler(handler)
        return logger

    if getattr(handler.stream, "closed", False):
        handler.stream = target
    if fmt:
        handler.setFormatter(logging.Formatter(fmt))
    return logger
