"""Logging helpers for the library and the command-line harness."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "qdailymotion"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or one of its children when *name* is given."""

    if not name:
        return logging.getLogger(PACKAGE_LOGGER)
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Route package log records to stderr through :class:`RichHandler`.

    Calling this more than once replaces the previously installed handler so
    the CLI can be invoked repeatedly from tests without duplicating output.
    """

    logger = get_logger()
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger


__all__ = ["PACKAGE_LOGGER", "get_logger", "setup_logging"]
