"""
Mkdir command - Create directories.
"""

import os

from pipekit.codes import ResultCode
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap


@PipeMap.register
class MkdirCommand(PipeCommand):
    """Create each directory, including missing parents."""

    keywords = ["mkdir", "md"]

    def run(self, args: list[str]) -> ResultCode:
        if not args:
            return self.codes.MISSING_ARGUMENTS

        for arg in args:
            path = self.parse_path(arg)
            if os.path.isfile(path):
                self.log.error(f"A file already exists at {path}")
                return self.codes.INVALID_ARGUMENTS
            os.makedirs(path, exist_ok=True)

        return self.codes.SUCCESS
