"""Logging setup for the server process."""

from __future__ import annotations

import logging
from typing import Iterable

from rich.console import Console
from rich.logging import RichHandler

from .redact import REDACTED, RedactionFilter, install_redaction_filter

LOGGER_NAME = "make_mcp"


def configure_logging(level: str | int = "INFO", secrets: Iterable[str] = ()) -> logging.Logger:
    """Send ``make_mcp`` logs to stderr through a redacting rich handler.

    stdout is reserved for the MCP stdio transport, so nothing may log there.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s %(message)s"))
    install_redaction_filter(handler, secrets)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


__all__ = [
    "LOGGER_NAME",
    "REDACTED",
    "RedactionFilter",
    "configure_logging",
    "install_redaction_filter",
]
