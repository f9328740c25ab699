"""Logging setup shared by the library modules and the CLI."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``mpq2json`` hierarchy."""
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> None:
    """Configure root logging for command-line runs.

    Library code never calls this; it only obtains loggers through
    :func:`get_logger` and leaves handler setup to the application.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=_LOG_FORMAT, force=True)
