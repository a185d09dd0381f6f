"""Logging setup for the console, with rich output."""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.INFO) -> None:
    """Route log records through a RichHandler on stderr.

    Library code only creates module loggers; handlers are installed here,
    once, by the CLI.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(name)s - %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
