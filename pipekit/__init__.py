"""
pipekit - Line-oriented automation scripts ("pipes").

A pipe is a script of file-system commands mixed with directives
(:if, :eval, :each folder|file, :open, ...) run against a
variable environment.

Usage:
    from pipekit import run_script

    run_script(
        "mkdir dist:eol::each file:eol:copy $currentFile dist",
        cwd="assets",
    )
"""

# Lazy imports to avoid circular import issues
def __getattr__(name: str):
    if name in ("PipeExecutor", "run_script", "run_file", "parse_instructions"):
        from pipekit import executors
        return getattr(executors, name)
    if name == "Environment":
        from pipekit.environment import Environment
        return Environment
    if name in ("ResultCode", "PipeState"):
        from pipekit import codes
        return getattr(codes, name)
    if name == "PipeMap":
        from pipekit.pipe.pipe_map import PipeMap
        return PipeMap
    if name == "PipeCommand":
        from pipekit.pipe.commands.base import PipeCommand
        return PipeCommand
    if name == "PipeError":
        from pipekit.errors import PipeError
        return PipeError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Environment",
    "PipeCommand",
    "PipeError",
    "PipeExecutor",
    "PipeMap",
    "PipeState",
    "ResultCode",
    "parse_instructions",
    "run_file",
    "run_script",
]

__version__ = "0.1.0"
