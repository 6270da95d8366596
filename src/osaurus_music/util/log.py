from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "osaurus_music"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stderr RichHandler to the package logger (stdout stays JSON-only)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        h = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        h.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(h)

    return logger
