"""
Pipe Executors - Entry point for running pipe scripts.

This module provides the PipeExecutor class, which walks the
instruction queue of one script, and convenience functions for
running scripts and script files.
"""

import logging
from collections import deque
from typing import Any, Iterable, Mapping

from pipekit.codes import PipeState, ResultCode
from pipekit.debugger import Debugger
from pipekit.environment import Environment
from pipekit.errors import (
    CommandFailedError,
    ExitProcess,
    InvalidArgumentsError,
    MissingArgumentsError,
    PipeError,
)
from pipekit.evaluator import Evaluator, SafeEvaluator
from pipekit.parser.instruction_extractor import extract_instruction
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.directives import DirectiveEvaluator
from pipekit.pipe.pipe_map import PipeMap

log = logging.getLogger(__name__)

EOL_MARKER = ":eol:"
FALLBACK_COMMAND = "run"


def _is_comment(line: str) -> bool:
    return line.startswith(("//", "rem"))


def parse_instructions(script: str | None) -> list[str]:
    """
    Split script text into instructions.

    Lines are trimmed; blank lines and comments (``//`` or ``rem``)
    are dropped. ``:eol:`` stands for a line break.

    Args:
        script: The script text

    Returns:
        The list of instructions
    """
    text = (script or "").replace(EOL_MARKER, "\n")
    lines = (line.strip() for line in text.split("\n"))
    return [line for line in lines if line and not _is_comment(line)]


class PipeExecutor:
    """
    Runs the instructions of one pipe.

    Each :each directive spawns one child executor per folder/file,
    with a forked environment and a dotted id ("1.2", "1.2.1", ...).

    Usage:
        executor = PipeExecutor(Environment(cwd="/project"))
        executor.load("mkdir dist:eol:copy src dist")
    """

    def __init__(
        self,
        environment: Environment,
        pipe_id: str = "1",
        evaluator: Evaluator | None = None,
    ):
        """
        Initialize the executor.

        Args:
            environment: The environment owned by this pipe
            pipe_id: Hierarchical id used in diagnostics
            evaluator: Expression evaluator for :eval and :if
        """
        self.environment = environment
        self.environment.pipe_id = pipe_id
        self.pipe_id = pipe_id
        self.evaluator = evaluator or SafeEvaluator()
        self.environment.evaluator = self.evaluator
        self.state = PipeState.RUNNING
        self.directives = DirectiveEvaluator(self)

    def spawn(self, environment: Environment, pipe_id: str) -> "PipeExecutor":
        """Create a child executor sharing this one's evaluator."""
        return PipeExecutor(environment, pipe_id, self.evaluator)

    def load_file(self, path: str) -> ResultCode:
        """Run the script stored at path (relative to the cwd)."""
        with open(self.environment.parse_path(path), "r", encoding="utf-8") as f:
            return self.load(f.read())

    def load(self, script: str | None) -> ResultCode:
        """Run script text."""
        return self.execute(parse_instructions(script))

    def execute(self, instructions: Iterable[str]) -> ResultCode:
        """
        Run already parsed instructions to completion.

        Returns:
            ResultCode.SUCCESS when the pipe finished or was exited

        Raises:
            PipeError: If an instruction fails (here or in a child pipe)
            ExitProcess: If a command asked to terminate the run
        """
        log.info(f'Running pipe "{self.pipe_id}"')
        PipeMap.load()
        self.environment.debugger.breakpoint()

        queue = deque(instructions)
        self.state = PipeState.RUNNING
        current: str | None = None

        try:
            while queue:
                current = queue.popleft()

                if self.directives.is_directive(current):
                    if self.directives.process(current, queue):
                        break
                    continue

                code = self._process_command(current)

                if code == ResultCode.INVALID_ARGUMENTS:
                    raise InvalidArgumentsError(f'Invalid arguments in instruction "{current}".')
                elif code == ResultCode.MISSING_ARGUMENTS:
                    raise MissingArgumentsError(f'Missing arguments in instruction "{current}".')
                elif code == ResultCode.EXIT_PIPE:
                    self.state = PipeState.ABORTED
                    break
                elif code == ResultCode.EXIT_PROCESS:
                    raise ExitProcess(self.pipe_id, current)

        except ExitProcess:
            self.state = PipeState.TERMINATED
            log.debug(f'Pipe "{self.pipe_id}" terminated')
            raise
        except PipeError as error:
            error.locate(current, self.pipe_id)
            self._fail(error)
            raise
        except Exception as error:
            wrapped = CommandFailedError(
                str(error) or type(error).__name__,
                instruction=current,
                pipe_id=self.pipe_id,
            )
            self._fail(wrapped)
            raise wrapped from error

        if self.state == PipeState.RUNNING:
            self.state = PipeState.FINISHED

        log.debug(f'Pipe "{self.pipe_id}" finished successfully')

        return ResultCode.SUCCESS

    def _fail(self, error: PipeError) -> None:
        self.state = PipeState.FAILED
        log.debug(f'Pipe "{self.pipe_id}" failed')
        self.environment.debugger.breakpoint(error=error.describe())

    def _process_command(self, current: str) -> ResultCode:
        """
        Dispatch one instruction to its command.

        Unknown command names are passed, name included, to the
        fallback ``run`` command.
        """
        tokens = extract_instruction(self.environment.apply_variables(current))
        name = tokens.pop(0) if tokens else ""

        command_class = PipeMap.get(name)
        if command_class is None:
            tokens.insert(0, name)
            command_class = PipeMap.get(FALLBACK_COMMAND)
            if command_class is None:
                raise CommandFailedError(f"Unknown command: {name}")

        command = command_class(self.environment)

        if not isinstance(command, PipeCommand):
            raise TypeError(f"{command!r} ({current}) is not a command")

        self.environment.debugger.breakpoint(f"> {current}")

        result = command.run(tokens)

        if result == ResultCode.INVALID_ARGUMENTS:
            log.error(" - Invalid arguments")
        elif result == ResultCode.MISSING_ARGUMENTS:
            log.error(" - Missing arguments")
        else:
            log.debug(" - Success")

        return result


def run_script(
    script: str,
    cwd: str | None = None,
    variables: Mapping[str, Any] | None = None,
    verbose: bool = False,
    debugger: Debugger | None = None,
    evaluator: Evaluator | None = None,
) -> ResultCode:
    """
    Run script text in a fresh root pipe.

    Returns:
        ResultCode.SUCCESS, or ResultCode.EXIT_PROCESS if the run was terminated

    Raises:
        PipeError: If any pipe of the run failed
    """
    environment = Environment(cwd=cwd, variables=variables, verbose=verbose, debugger=debugger)
    try:
        return PipeExecutor(environment, evaluator=evaluator).load(script)
    except ExitProcess as signal:
        log.info(f"Run terminated by pipe {signal.pipe_id}")
        return ResultCode.EXIT_PROCESS


def run_file(
    path: str,
    cwd: str | None = None,
    variables: Mapping[str, Any] | None = None,
    verbose: bool = False,
    debugger: Debugger | None = None,
    evaluator: Evaluator | None = None,
) -> ResultCode:
    """Run a script file in a fresh root pipe. See run_script."""
    environment = Environment(cwd=cwd, variables=variables, verbose=verbose, debugger=debugger)
    try:
        return PipeExecutor(environment, evaluator=evaluator).load_file(path)
    except ExitProcess as signal:
        log.info(f"Run terminated by pipe {signal.pipe_id}")
        return ResultCode.EXIT_PROCESS
