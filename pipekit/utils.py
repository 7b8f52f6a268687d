"""Shared console and logging setup"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for pipekit.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level - pipe lifecycle, forks, directives
    - Debug (PIPEKIT_DEBUG=1): DEBUG level - every instruction and breakpoint
    """
    if os.environ.get("PIPEKIT_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=bool(os.environ.get("PIPEKIT_DEBUG")),
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("pipekit")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False
