"""
Directive evaluator.

Directives are instructions starting with ``:`` that the pipe executor
interprets itself instead of dispatching to a command:

    :begin / :end          block markers (no-ops on their own)
    :break                 manual breakpoint
    :eval <expr>           store the value of <expr> in $eval
    :if <expr>             skip the next line (or :begin ... :end block) when falsy
    :each folder|file      run the rest of the pipe once per folder/file, by name
    :open <file>           edit a file, taking "-option" lines that follow

Unknown directives are ignored.
"""

import logging
import os
from collections import deque
from typing import TYPE_CHECKING, Any, Callable

from pipekit.codes import ResultCode
from pipekit.errors import MissingArgumentsError
from pipekit.parser.instruction_extractor import extract_instruction
from pipekit.pipe.commands.open import OpenCommand

if TYPE_CHECKING:
    from pipekit.environment import Environment
    from pipekit.executors import PipeExecutor

log = logging.getLogger(__name__)

SIGIL = ":"

Handler = Callable[[str, list[str], deque], bool]


class DirectiveEvaluator:
    """
    Executes directives for one pipe executor.

    Each handler receives the directive line, its tokens and the
    executor's remaining queue, and returns True when the pipe
    must stop after it.
    """

    def __init__(self, executor: "PipeExecutor"):
        self.executor = executor
        self._handlers: dict[str, Handler] = {
            ":begin": self._begin,
            ":end": self._end,
            ":break": self._break,
            ":eval": self._eval,
            ":if": self._if,
            ":each": self._each,
            ":open": self._open,
        }

    @property
    def environment(self) -> "Environment":
        return self.executor.environment

    @staticmethod
    def is_directive(instruction: str) -> bool:
        return instruction.startswith(SIGIL)

    def process(self, instruction: str, queue: deque) -> bool:
        """
        Run one directive.

        Args:
            instruction: The directive line
            queue: Remaining instructions of the pipe (may be consumed)

        Returns:
            True if the pipe should finish after this directive
        """
        tokens = extract_instruction(instruction)
        name = tokens[0].lower() if tokens else instruction
        handler = self._handlers.get(name)

        if handler is None:
            log.debug(f"Ignoring unknown directive {name}")
            return False

        return handler(instruction, tokens, queue)

    def _begin(self, instruction: str, tokens: list[str], queue: deque) -> bool:
        log.debug("Begin")
        return False

    def _end(self, instruction: str, tokens: list[str], queue: deque) -> bool:
        log.debug("End")
        return False

    def _break(self, instruction: str, tokens: list[str], queue: deque) -> bool:
        self.environment.debugger.breakpoint("Manual breakpoint", manual=True)
        return False

    def _evaluate(self, instruction: str) -> Any:
        parts = instruction.split(None, 1)
        if len(parts) < 2:
            raise MissingArgumentsError(f"Missing expression in {parts[0]}")

        expression = self.environment.apply_variables(parts[1].strip())
        self.environment.debugger.breakpoint(f"Evaluate {expression}")
        return self.executor.evaluator.evaluate(expression, self.environment.variables)

    def _eval(self, instruction: str, tokens: list[str], queue: deque) -> bool:
        log.info(instruction)
        result = self._evaluate(instruction)
        self.environment.set_variable("$eval", result)
        return False

    def _if(self, instruction: str, tokens: list[str], queue: deque) -> bool:
        log.info(instruction)
        result = self._evaluate(instruction)

        if not result and queue:
            # A falsy condition always drops the next line; if that line
            # opens a block, drop everything up to the first :end too.
            skipped = queue.popleft()
            if skipped == ":begin":
                while queue and queue.popleft() != ":end":
                    pass
            log.debug(f"Skipped {skipped!r}")

        if self.environment.is_verbose_enabled:
            log.info(f"Inline if succeeded with {result}")

        self.environment.debugger.breakpoint()
        return False

    def _each(self, instruction: str, tokens: list[str], queue: deque) -> bool:
        target = tokens[1].lower() if len(tokens) > 1 else None

        if target == "folder":
            self._each_folder(queue)
            return True
        if target == "file":
            self._each_file(queue)
            return True

        log.debug(f"Ignoring {instruction!r}: expected 'folder' or 'file'")
        return False

    def _each_folder(self, queue: deque) -> None:
        root = self.environment.cwd
        folders = [
            name for name in sorted(os.listdir(root)) if os.path.isdir(os.path.join(root, name))
        ]

        def bindings(index: int, name: str) -> dict[str, Any]:
            path = os.path.join(root, name)
            return {
                "$currentFolder": name,
                "$currentFolderPath": path,
                "$currentFolderAbsolutePath": os.path.abspath(path),
                "$foldersCount": len(folders),
                "$folderIndex": index,
            }

        self._fork(folders, bindings, queue)

    def _each_file(self, queue: deque) -> None:
        root = self.environment.cwd
        files = [
            name for name in sorted(os.listdir(root)) if os.path.isfile(os.path.join(root, name))
        ]

        def bindings(index: int, name: str) -> dict[str, Any]:
            path = os.path.join(root, name)
            return {
                "$currentFile": name,
                "$currentFilePath": path,
                "$currentFileAbsolutePath": os.path.abspath(path),
                "$filesCount": len(files),
                "$fileIndex": index,
            }

        self._fork(files, bindings, queue)

    def _fork(
        self,
        names: list[str],
        bindings: Callable[[int, str], dict[str, Any]],
        queue: deque,
    ) -> None:
        """Run the remaining instructions once per name, one child at a time."""
        body = tuple(queue)
        queue.clear()

        for index, name in enumerate(names):
            log.debug(f"Forking pipe to {name}")
            self.environment.debugger.breakpoint()

            fork = self.environment.fork()
            fork.set_variables(bindings(index, name))

            child = self.executor.spawn(fork, f"{self.executor.pipe_id}.{index + 1}")
            child.execute(body)

    def _open(self, instruction: str, tokens: list[str], queue: deque) -> bool:
        tokens = extract_instruction(self.environment.apply_variables(instruction))
        if len(tokens) < 2:
            raise MissingArgumentsError("Missing file in :open")

        open_args = tokens[1:]
        log.info(instruction)

        while queue and queue[0].strip().startswith("-"):
            option = queue.popleft()
            open_args.extend(extract_instruction(self.environment.apply_variables(option)))
            log.debug(f" - Instruction added: {option}")

        log.info("Running open command...")
        self.environment.debugger.breakpoint()

        code = OpenCommand(self.environment).run(open_args)

        if code != ResultCode.SUCCESS:
            message = f"Open command has exited with an error code: {code.name}."
            log.error(message)
            self.environment.debugger.breakpoint(error=message)
            return True

        log.info("Open command success")
        self.environment.debugger.breakpoint()
        return False
