"""
Delete command - Remove files and directory trees.
"""

import os
import shutil

from pipekit.codes import ResultCode
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap


@PipeMap.register
class DeleteCommand(PipeCommand):
    """
    Delete files or directory trees.

    Usage:
        delete dist
        rm cache.tmp --force      (no error when missing)
    """

    keywords = ["delete", "rm", "del"]

    def run(self, args: list[str]) -> ResultCode:
        if not args:
            return self.codes.MISSING_ARGUMENTS

        force = False
        paths: list[str] = []
        for arg in args:
            if arg in ("-f", "--force"):
                force = True
            elif arg.startswith("-"):
                return self.codes.INVALID_ARGUMENTS
            else:
                paths.append(self.parse_path(arg))

        if not paths:
            return self.codes.MISSING_ARGUMENTS

        for path in paths:
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            elif os.path.lexists(path):
                os.remove(path)
            elif not force:
                self.log.error(f"Path not found: {path}")
                return self.codes.INVALID_ARGUMENTS
            self.log.info(f"Deleted {path}")

        return self.codes.SUCCESS
