"""
Base class for pipe commands.

A command receives the argument tokens of one instruction, acts on the
environment of the pipe running it and reports a ResultCode.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from pipekit.codes import ResultCode

if TYPE_CHECKING:
    from pipekit.environment import Environment


class PipeCommand(ABC):
    """
    Abstract base class for pipe commands.

    Subclasses set `keywords` and implement `run(args)`.

    Commands are constructed with the Environment of the pipe
    running them and resolve relative paths against its cwd.
    """

    keywords: list[str] = []

    codes = ResultCode

    def __init__(self, environment: "Environment"):
        self.environment = environment
        self.log = logging.getLogger(type(self).__module__)

    @abstractmethod
    def run(self, args: list[str]) -> ResultCode:
        """
        Run the command.

        Args:
            args: Argument tokens, variables already substituted

        Returns:
            The result code
        """
        pass

    def parse_path(self, path: str) -> str:
        return self.environment.parse_path(path)

    def breakpoint(self, message: str | None = None) -> None:
        self.environment.debugger.breakpoint(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.environment.cwd!r})"
