"""
Run command - Execute an external program.

This is also the fallback for instructions whose name is not a
registered command, so plain shell-style lines pass straight through.
"""

import shlex
import subprocess

from pipekit.codes import ResultCode
from pipekit.errors import CommandFailedError
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap


@PipeMap.register
class RunCommand(PipeCommand):
    """
    Run a program in the pipe's working directory.

    Usage:
        run git status
        run --shell "ls -la | sort"
        npm install          (unknown names are routed here)
    """

    keywords = ["run", "exec"]

    def run(self, args: list[str]) -> ResultCode:
        if not args:
            return self.codes.MISSING_ARGUMENTS

        shell = args[0] in ("-s", "--shell")
        if shell:
            args = args[1:]
            if not args:
                return self.codes.MISSING_ARGUMENTS

        command_line = " ".join(args) if shell else shlex.join(args)
        self.log.info(f"Run: {command_line}")
        self.breakpoint(f"> {command_line}")

        try:
            result = subprocess.run(
                command_line if shell else args,
                cwd=self.environment.cwd,
                shell=shell,
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandFailedError(f"Program not found: {args[0]}") from e
        except OSError as e:
            raise CommandFailedError(f"Failed to start {args[0]}: {e}") from e

        if result.returncode != 0:
            raise CommandFailedError(
                f"{args[0]} exited with code {result.returncode}",
                exit_code=result.returncode,
            )

        return self.codes.SUCCESS
