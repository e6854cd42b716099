"""Logging setup. Everything goes to stderr; stdout carries the MCP stream."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)


def configure_logging(level: str = "WARNING") -> None:
    """Route the ``qbridge`` logger through a rich handler on stderr.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
    """
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger("qbridge")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False
