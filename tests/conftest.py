"""
Pytest configuration and shared fixtures.

This module provides:
- Automatic restore of the command registry after each test
- Test-only commands that record their calls or return a chosen code
- Temporary folder trees for :each tests
"""

import pytest

from pipekit.codes import ResultCode
from pipekit.environment import Environment
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap


class RecordCommand(PipeCommand):
    """Records (pipe id, args) for every call."""

    keywords = ["record"]
    calls: list[tuple[str, list[str]]] = []

    def run(self, args: list[str]) -> ResultCode:
        RecordCommand.calls.append((self.environment.pipe_id, list(args)))
        return self.codes.SUCCESS


class ReturnsCommand(PipeCommand):
    """Returns the code named by its argument, e.g. ``returns exit_pipe``."""

    keywords = ["returns"]

    def run(self, args: list[str]) -> ResultCode:
        return ResultCode[args[0].upper()]


class ExplodeCommand(PipeCommand):
    """Raises an unexpected exception."""

    keywords = ["explode"]

    def run(self, args: list[str]) -> ResultCode:
        raise RuntimeError("boom")


@pytest.fixture(autouse=True)
def restore_registry():
    """Register the test commands and restore the registry afterwards."""
    PipeMap.load()
    saved = dict(PipeMap._registry)
    RecordCommand.calls = []
    for command_class in (RecordCommand, ReturnsCommand, ExplodeCommand):
        PipeMap.register(command_class)
    yield
    PipeMap._registry.clear()
    PipeMap._registry.update(saved)


@pytest.fixture
def records(restore_registry) -> list[tuple[str, list[str]]]:
    """Calls made to the ``record`` command during the test."""
    return RecordCommand.calls


@pytest.fixture
def recorded(records):
    """Helper returning the first argument of every ``record`` call."""

    def first_args() -> list[str]:
        return [args[0] if args else "" for _, args in records]

    return first_args


@pytest.fixture
def folder_tree(tmp_path):
    """Three sub-folders and two files, created out of order; returns folder names by name."""
    for name in ("gamma", "alpha", "beta"):
        (tmp_path / name).mkdir()
    (tmp_path / "two.txt").write_text("2", encoding="utf-8")
    (tmp_path / "one.txt").write_text("1", encoding="utf-8")
    return ["alpha", "beta", "gamma"]


@pytest.fixture
def listed_files(folder_tree):
    """File names of folder_tree, by name."""
    return ["one.txt", "two.txt"]


@pytest.fixture
def env(tmp_path) -> Environment:
    """An environment rooted in the test's temporary directory."""
    return Environment(cwd=str(tmp_path))
