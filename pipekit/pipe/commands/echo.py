"""
Echo command - Print a message.
"""

from pipekit.codes import ResultCode
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap
from pipekit.utils import console


@PipeMap.register
class EchoCommand(PipeCommand):
    keywords = ["echo", "print"]

    def run(self, args: list[str]) -> ResultCode:
        console.print(" ".join(args), markup=False, highlight=False)
        return self.codes.SUCCESS
