"""
Pipe module for command execution.

This module provides the command registry and the directive
evaluator used by the pipe executor.
"""

from pipekit.pipe.pipe_map import PipeMap

__all__ = [
    "PipeMap",
]
