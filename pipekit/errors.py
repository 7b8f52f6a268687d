"""
Error types raised while running pipes.

Every failure that aborts a pipe is a PipeError carrying the instruction
text and the id of the pipe it originated in. ExitProcess is a control
signal used to unwind the whole pipe tree and is deliberately not a
PipeError.
"""


class PipeError(Exception):
    """Base exception for pipe execution failures."""

    def __init__(
        self,
        message: str,
        instruction: str | None = None,
        pipe_id: str | None = None,
        exit_code: int = 1,
    ) -> None:
        self.message = message
        self.instruction = instruction
        self.pipe_id = pipe_id
        self.exit_code = exit_code
        super().__init__(message)

    def locate(self, instruction: str | None, pipe_id: str) -> "PipeError":
        """Attach origin information unless an inner pipe already did."""
        if self.instruction is None:
            self.instruction = instruction
        if self.pipe_id is None:
            self.pipe_id = pipe_id
        return self

    def describe(self) -> str:
        where = f"pipe {self.pipe_id}" if self.pipe_id else "pipe"
        if self.instruction:
            return f'Error in {where} at "{self.instruction}": {self.message}'
        return f"Error in {where}: {self.message}"


class MissingArgumentsError(PipeError):
    """A command or directive was given no arguments."""


class InvalidArgumentsError(PipeError):
    """A command rejected its arguments."""


class EvaluationError(PipeError):
    """An :eval or :if expression could not be evaluated."""


class CommandFailedError(PipeError):
    """A command failed while running (process error, I/O error, ...)."""


class ExitProcess(Exception):
    """Raised when a command asks to terminate the entire run."""

    def __init__(self, pipe_id: str, instruction: str | None = None) -> None:
        self.pipe_id = pipe_id
        self.instruction = instruction
        super().__init__(f"Process exit requested by pipe {pipe_id}")
