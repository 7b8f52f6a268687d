"""
Exit commands - Stop the current pipe or the whole run.
"""

from pipekit.codes import ResultCode
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap


@PipeMap.register
class ExitCommand(PipeCommand):
    """Leave the current pipe. Sibling forks keep running."""

    keywords = ["exit"]

    def run(self, args: list[str]) -> ResultCode:
        return self.codes.EXIT_PIPE


@PipeMap.register
class QuitCommand(PipeCommand):
    """Terminate every pipe of the run."""

    keywords = ["quit"]

    def run(self, args: list[str]) -> ResultCode:
        return self.codes.EXIT_PROCESS
