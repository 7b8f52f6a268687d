"""
Cd command - Change the pipe's working directory.
"""

import os

from pipekit.codes import ResultCode
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap


@PipeMap.register
class CdCommand(PipeCommand):
    """
    Change the working directory of the current pipe.

    Usage:
        cd $currentFolderPath
        cd ..
    """

    keywords = ["cd"]

    def run(self, args: list[str]) -> ResultCode:
        if not args:
            return self.codes.MISSING_ARGUMENTS

        if len(args) != 1:
            return self.codes.INVALID_ARGUMENTS

        path = self.parse_path(args[0])
        if not os.path.isdir(path):
            self.log.error(f"Not a directory: {path}")
            return self.codes.INVALID_ARGUMENTS

        self.environment.cwd = path
        self.log.debug(f"cwd is now {path}")

        return self.codes.SUCCESS
