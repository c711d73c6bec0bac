"""Logging configuration helpers."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """Route log records through rich and return the package logger."""
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s | %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), rich_tracebacks=False)],
        force=True,
    )
    return logging.getLogger("quizform")
