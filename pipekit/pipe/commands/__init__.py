"""
Pipe Commands module.

This module contains all built-in pipe command implementations.
Commands are automatically registered via the @PipeMap.register decorator.
"""

from pipekit.pipe.commands.base import PipeCommand

# Process commands
from pipekit.pipe.commands.run import RunCommand
from pipekit.pipe.commands.pipe import SubPipeCommand
from pipekit.pipe.commands.exit import ExitCommand, QuitCommand

# File commands
from pipekit.pipe.commands.open import OpenCommand
from pipekit.pipe.commands.copy import CopyCommand
from pipekit.pipe.commands.move import MoveCommand
from pipekit.pipe.commands.delete import DeleteCommand
from pipekit.pipe.commands.mkdir import MkdirCommand
from pipekit.pipe.commands.cd import CdCommand

# Environment commands
from pipekit.pipe.commands.set import SetCommand
from pipekit.pipe.commands.echo import EchoCommand

__all__ = [
    # Base
    "PipeCommand",
    # Process
    "RunCommand",
    "SubPipeCommand",
    "ExitCommand",
    "QuitCommand",
    # Files
    "OpenCommand",
    "CopyCommand",
    "MoveCommand",
    "DeleteCommand",
    "MkdirCommand",
    "CdCommand",
    # Environment
    "SetCommand",
    "EchoCommand",
]
