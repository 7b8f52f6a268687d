"""
Breakpoint support for stepping through pipes.

Breakpoints are voluntary suspension points. With stepping disabled they
only log, so they never change what a pipe does.
"""

import logging

from rich.prompt import Prompt

from pipekit.utils import console

log = logging.getLogger(__name__)


class Debugger:
    """
    Pauses execution at breakpoints when enabled.

    Args:
        step: Pause at every breakpoint (interactive stepping)
        breakpoints: Pause at manual ``:break`` directives
    """

    def __init__(self, step: bool = False, breakpoints: bool = False):
        self.step = step
        self.breakpoints = breakpoints
        self.hits = 0

    def breakpoint(
        self,
        message: str | None = None,
        error: BaseException | str | None = None,
        manual: bool = False,
    ) -> None:
        self.hits += 1

        if error is not None:
            log.debug(f"Breakpoint: {error}")
        elif message:
            log.debug(f"Breakpoint: {message}")

        if not (self.step or (manual and self.breakpoints)):
            return

        if error is not None:
            console.print(f"[red]{error}[/red]")
        elif message:
            console.print(message, markup=False)

        answer = Prompt.ask(
            "[dim]Paused[/dim] (enter to continue, 'c' to stop stepping)",
            default="",
            show_default=False,
            console=console,
        )
        if answer.strip().lower() == "c":
            self.step = False
