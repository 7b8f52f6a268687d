"""
Variable environment for pipe execution.

An Environment holds the variables and working directory of one pipe.
Forking produces an independent copy, so child pipes never leak bindings
back into their parent.
"""

import os
import re
from typing import Any, Mapping

from pipekit.debugger import Debugger

VARIABLE_PATTERN = re.compile(r"\$[A-Za-z_][A-Za-z0-9_]*")


def _key(name: str) -> str:
    return name if name.startswith("$") else f"${name}"


def format_value(value: Any) -> str:
    """Stringify a variable value for substitution into script text."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Environment:
    """
    Mutable variable store plus a working directory.

    Usage:
        env = Environment(cwd="/data")
        env.set_variable("name", "report")
        env.apply_variables("copy $name.txt out/")  # "copy report.txt out/"
    """

    def __init__(
        self,
        cwd: str | None = None,
        variables: Mapping[str, Any] | None = None,
        verbose: bool = False,
        debugger: Debugger | None = None,
    ):
        self.cwd = cwd or os.getcwd()
        self.verbose = verbose
        self.debugger = debugger or Debugger()
        # set by the executor owning this environment
        self.pipe_id = "1"
        self.evaluator = None
        self.variables: dict[str, Any] = {}
        if variables:
            self.set_variables(variables)

    @property
    def is_verbose_enabled(self) -> bool:
        return self.verbose

    def set_variable(self, name: str, value: Any) -> None:
        self.variables[_key(name)] = value

    def set_variables(self, variables: Mapping[str, Any]) -> None:
        for name, value in variables.items():
            self.set_variable(name, value)

    def get_variable(self, name: str, default: Any = None) -> Any:
        return self.variables.get(_key(name), default)

    def apply_variables(self, text: str) -> str:
        """
        Replace every bound ``$name`` token in text.

        Unbound tokens are left as they are. Substituted values are not
        scanned again.
        """

        def replace(match: re.Match) -> str:
            name = match.group(0)
            if name in self.variables:
                return format_value(self.variables[name])
            return name

        return VARIABLE_PATTERN.sub(replace, text)

    def parse_path(self, path: str) -> str:
        """Resolve a path relative to the working directory."""
        return os.path.normpath(os.path.join(self.cwd, os.path.expanduser(path)))

    def fork(self, cwd: str | None = None, verbose: bool | None = None) -> "Environment":
        """
        Create an independent child environment.

        Args:
            cwd: Working directory for the child (defaults to this one)
            verbose: Override the verbose flag

        Returns:
            A new Environment with a copy of the variables
        """
        return Environment(
            cwd=self.parse_path(cwd) if cwd else self.cwd,
            variables=dict(self.variables),
            verbose=self.verbose if verbose is None else verbose,
            debugger=self.debugger,
        )

    def __repr__(self) -> str:
        return f"Environment(cwd={self.cwd!r}, variables={len(self.variables)})"
