"""
Pipe command - Run another pipe script.
"""

import os

from pipekit.codes import ResultCode
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap


@PipeMap.register
class SubPipeCommand(PipeCommand):
    """
    Run a script file in a forked environment.

    Extra ``name=value`` arguments are bound in the child only.

    Usage:
        pipe build.pipe
        call deploy.pipe target=staging
    """

    keywords = ["pipe", "call"]

    def run(self, args: list[str]) -> ResultCode:
        from pipekit.executors import PipeExecutor

        if not args:
            return self.codes.MISSING_ARGUMENTS

        path = self.parse_path(args[0])
        if not os.path.isfile(path):
            self.log.error(f"Pipe file not found: {path}")
            return self.codes.INVALID_ARGUMENTS

        bindings = {}
        for arg in args[1:]:
            name, sep, value = arg.partition("=")
            if not sep or not name:
                return self.codes.INVALID_ARGUMENTS
            bindings[name] = value

        fork = self.environment.fork()
        fork.set_variables(bindings)

        pipe_id = f"{self.environment.pipe_id}/{os.path.basename(path)}"
        return PipeExecutor(fork, pipe_id, self.environment.evaluator).load_file(path)
