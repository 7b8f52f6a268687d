"""pipekit CLI entry point

Usage:
    pipekit run build.pipe                   # Run a script file
    pipekit run build.pipe --var target=dist # With initial variables
    pipekit run build.pipe --step            # Pause at every breakpoint
    pipekit exec "mkdir out:eol:copy a.txt out"
    pipekit commands                         # List available commands
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

import typer
from rich.table import Table

from pipekit import __version__
from pipekit.codes import ResultCode
from pipekit.config import PipekitConfig, find_config, load_config
from pipekit.debugger import Debugger
from pipekit.errors import PipeError
from pipekit.executors import run_file, run_script
from pipekit.pipe.pipe_map import PipeMap
from pipekit.utils import console, setup_logging

app = typer.Typer(help="Run line-oriented automation scripts (pipes).", no_args_is_help=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pipekit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Run line-oriented automation scripts (pipes)."""


def parse_vars(values: Optional[List[str]]) -> dict[str, str]:
    """Parse repeated name=value options into a mapping."""
    variables: dict[str, str] = {}
    for item in values or []:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected name=value, got {item!r}", param_hint="--var")
        variables[name.strip()] = value
    return variables


def _prepare(
    config_path: Optional[Path], verbose: bool, step: bool, variables: dict[str, str]
) -> tuple[PipekitConfig, Debugger, dict[str, Any]]:
    try:
        config = load_config(config_path or find_config())
    except PipeError as error:
        typer.echo(f"Error: {error.message}", err=True)
        raise typer.Exit(1)

    config.verbose = config.verbose or verbose
    setup_logging(config.verbose)

    breakpoints = config.breakpoints
    if breakpoints is None:
        breakpoints = sys.stdin.isatty()
    debugger = Debugger(step=step or config.step, breakpoints=breakpoints)

    return config, debugger, {**config.variables, **variables}


def _execute(run: Callable[[], ResultCode]) -> None:
    try:
        code = run()
    except PipeError as error:
        typer.echo(error.describe(), err=True)
        raise typer.Exit(error.exit_code or 1)
    except OSError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(1)

    if code == ResultCode.EXIT_PROCESS:
        raise typer.Exit(0)


@app.command()
def run(
    script: Path = typer.Argument(..., help="Pipe script to run."),
    var: Optional[List[str]] = typer.Option(
        None, "--var", "-V", help="Initial variable as name=value (repeatable)."
    ),
    cwd: Optional[Path] = typer.Option(
        None, "--cwd", "-C", help="Working directory of the root pipe."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output."),
    step: bool = typer.Option(False, "--step", help="Pause at every breakpoint."),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to pipekit.yaml."
    ),
) -> None:
    """Run a pipe script file."""
    variables = parse_vars(var)
    config, debugger, variables = _prepare(config_path, verbose, step, variables)
    script_path = str(script.resolve())

    _execute(
        lambda: run_file(
            script_path,
            cwd=str(cwd) if cwd else None,
            variables=variables,
            verbose=config.verbose,
            debugger=debugger,
        )
    )


@app.command("exec")
def exec_(
    text: List[str] = typer.Argument(..., help="Script text; ':eol:' separates lines."),
    var: Optional[List[str]] = typer.Option(
        None, "--var", "-V", help="Initial variable as name=value (repeatable)."
    ),
    cwd: Optional[Path] = typer.Option(
        None, "--cwd", "-C", help="Working directory of the root pipe."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output."),
    step: bool = typer.Option(False, "--step", help="Pause at every breakpoint."),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to pipekit.yaml."
    ),
) -> None:
    """Run an inline script."""
    variables = parse_vars(var)
    config, debugger, variables = _prepare(config_path, verbose, step, variables)
    script = " ".join(text)

    _execute(
        lambda: run_script(
            script,
            cwd=str(cwd) if cwd else None,
            variables=variables,
            verbose=config.verbose,
            debugger=debugger,
        )
    )


@app.command()
def commands() -> None:
    """List the available commands."""
    table = Table(title="Commands")
    table.add_column("Keywords", style="cyan")
    table.add_column("Command")
    table.add_column("Description", style="dim")

    for command_class, keywords in PipeMap.commands().items():
        doc = (command_class.__doc__ or "").strip().splitlines()
        table.add_row(", ".join(keywords), command_class.__name__, doc[0] if doc else "")

    console.print(table)


if __name__ == "__main__":
    app()
