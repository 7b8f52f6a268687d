"""
Move command - Move or rename files and directories.
"""

import os
import shutil

from pipekit.codes import ResultCode
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap


@PipeMap.register
class MoveCommand(PipeCommand):
    """
    Move or rename a file or directory.

    Usage:
        move build/app.js dist/
        mv old-name.txt new-name.txt
    """

    keywords = ["move", "mv"]

    def run(self, args: list[str]) -> ResultCode:
        if not args:
            return self.codes.MISSING_ARGUMENTS

        if len(args) != 2:
            return self.codes.INVALID_ARGUMENTS

        source = self.parse_path(args[0])
        destination = self.parse_path(args[1])

        if not os.path.exists(source):
            self.log.error(f"Source not found: {source}")
            return self.codes.INVALID_ARGUMENTS

        self.log.info(f"{source} => {destination}")
        shutil.move(source, destination)

        return self.codes.SUCCESS
