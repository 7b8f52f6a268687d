"""
Result codes shared by commands and the pipe engine.
"""

from enum import Enum, auto


class ResultCode(Enum):
    """Closed set of codes returned by every command."""

    SUCCESS = auto()
    MISSING_ARGUMENTS = auto()
    INVALID_ARGUMENTS = auto()
    EXIT_PIPE = auto()  # break out of the current pipe
    EXIT_PROCESS = auto()  # stop the whole run


class PipeState(Enum):
    """Lifecycle states of a pipe executor."""

    RUNNING = auto()
    FINISHED = auto()
    FAILED = auto()
    ABORTED = auto()
    TERMINATED = auto()
