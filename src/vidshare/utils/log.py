"""Logging setup rendering standard library records through Rich."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "vidshare"


def configure_logging(level: str = "INFO", *, console: Optional[Console] = None) -> logging.Logger:
    """Attach a single Rich handler to the package logger and return it."""

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
