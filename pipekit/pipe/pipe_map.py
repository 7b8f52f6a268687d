"""
Pipe Map - Registry for command classes.

Commands register themselves with a class decorator; the executor looks
them up by the first word of each instruction. The built-in commands
live in COMMANDS_MODULE and are imported on first lookup.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pipekit.pipe.commands.base import PipeCommand

log = logging.getLogger(__name__)


def default_keyword(command_class: type) -> str:
    """Keyword derived from the class name: ``ArchiveCommand`` -> ``archive``."""
    name = command_class.__name__.lower()
    return name.removesuffix("command") or name


class PipeMap:
    """
    Keyword -> command class registry. Keywords are case-insensitive.

    Usage:
        @PipeMap.register
        class TouchCommand(PipeCommand):
            keywords = ["touch", "tap"]
            ...

        PipeMap.get("TAP")  # TouchCommand
    """

    _registry: dict[str, type["PipeCommand"]] = {}
    _loaded: bool = False

    COMMANDS_MODULE = "pipekit.pipe.commands"

    @classmethod
    def register(cls, command_class: type["PipeCommand"]) -> type["PipeCommand"]:
        """Register command_class under its keywords; returns it unchanged."""
        keywords = list(getattr(command_class, "keywords", None) or [default_keyword(command_class)])

        for keyword in keywords:
            previous = cls._registry.get(keyword.lower())
            if previous is not None and previous is not command_class:
                log.debug(f"{command_class.__name__} replaces {previous.__name__} for {keyword!r}")
            cls._registry[keyword.lower()] = command_class

        return command_class

    @classmethod
    def load(cls) -> None:
        """Import the built-in commands once so they register themselves."""
        if cls._loaded:
            return
        importlib.import_module(cls.COMMANDS_MODULE)
        cls._loaded = True
        log.debug(f"Loaded {len(cls._registry)} command keywords")

    @classmethod
    def get(cls, keyword: str) -> type["PipeCommand"] | None:
        cls.load()
        return cls._registry.get(keyword.lower())

    @classmethod
    def list(cls) -> list[str]:
        """Sorted list of every registered keyword, aliases included."""
        cls.load()
        return sorted(cls._registry)

    @classmethod
    def commands(cls) -> dict[type["PipeCommand"], list[str]]:
        """Registered classes with their keywords, in keyword order."""
        grouped: dict[type["PipeCommand"], list[str]] = {}
        for keyword in cls.list():
            grouped.setdefault(cls._registry[keyword], []).append(keyword)
        return grouped

    @classmethod
    def unregister(cls, keyword: str) -> None:
        cls._registry.pop(keyword.lower(), None)
