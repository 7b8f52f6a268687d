"""
Set command - Bind a variable in the pipe's environment.
"""

import re

from pipekit.codes import ResultCode
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap


@PipeMap.register
class SetCommand(PipeCommand):
    """
    Set a variable; extra words are joined with spaces.

    Usage:
        set target dist/app
        set greeting "hello world"
        echo $target
    """

    keywords = ["set"]

    def run(self, args: list[str]) -> ResultCode:
        if not args:
            return self.codes.MISSING_ARGUMENTS

        if len(args) < 2:
            return self.codes.INVALID_ARGUMENTS

        name = args[0].lstrip("$")
        if not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", name):
            self.log.error(f"Invalid variable name: {args[0]}")
            return self.codes.INVALID_ARGUMENTS

        value = " ".join(args[1:])
        self.environment.set_variable(name, value)
        self.log.debug(f"${name} = {value!r}")

        return self.codes.SUCCESS
